SECRET_KEY = "test-secret"

STORAGE_BACKEND = "memory"
STORAGE_DIR = ""

BASE_URL = "http://localhost"

RESET_TOKEN_TTL_MINUTES = 60
MIN_PASSWORD_LENGTH = 8
SIGNUP_ROLES = ("student", "faculty")

DEBUG = False
TESTING = True

SEED_DEMO_USERS = False
