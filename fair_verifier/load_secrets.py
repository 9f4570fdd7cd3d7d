import os
from dotenv import load_dotenv

load_dotenv()

db_backend = os.getenv("DB_BACKEND", "sqlite")
user = os.getenv("DB_USER")
password = os.getenv("DB_PASSWORD")
host = os.getenv("DB_HOST")
port = os.getenv("DB_PORT")
db_name = os.getenv("DB_NAME")
sqlite_path = os.getenv("SQLITE_PATH")

redis_host = os.getenv("REDIS_HOST", "redis")
redis_port = int(os.getenv("REDIS_PORT", "6379"))
admin_contact_channel = os.getenv("ADMIN_CONTACT_CHANNEL", "contact-updates")

admin_username = os.getenv("ADMIN_USERNAME")
admin_password = os.getenv("ADMIN_PASSWORD")

# Cookies live until logout unless a max age is configured
session_cookie_max_age = int(os.getenv("SESSION_COOKIE_MAX_AGE", "0")) or None

if __name__ == "__main__":
    print(db_backend, user, host, port, db_name, sqlite_path, redis_host, redis_port)
