import os


os.environ.setdefault("POSTGRES_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
