import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Local key-value storage: one JSON file per store under STORAGE_DIR
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "json")
STORAGE_DIR = os.getenv("STORAGE_DIR", "instance/storage")

# Links printed by the console mailer point here
BASE_URL = os.getenv("BASE_URL", "http://localhost:5000")

RESET_TOKEN_TTL_MINUTES = int(os.getenv("RESET_TOKEN_TTL_MINUTES", "60"))
MIN_PASSWORD_LENGTH = int(os.getenv("MIN_PASSWORD_LENGTH", "8"))
SIGNUP_ROLES = ("student", "faculty")

DEBUG = True

# Register verified admin/faculty/student demo accounts on startup
SEED_DEMO_USERS = bool(int(os.getenv("SEED_DEMO_USERS", "1")))
