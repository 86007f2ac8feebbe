import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "json")
STORAGE_DIR = os.getenv("STORAGE_DIR", "instance/storage")

BASE_URL = os.getenv("BASE_URL", "http://localhost:5000")

RESET_TOKEN_TTL_MINUTES = int(os.getenv("RESET_TOKEN_TTL_MINUTES", "60"))
MIN_PASSWORD_LENGTH = int(os.getenv("MIN_PASSWORD_LENGTH", "8"))
SIGNUP_ROLES = ("student", "faculty")

DEBUG = False

SEED_DEMO_USERS = bool(int(os.getenv("SEED_DEMO_USERS", "0")))
