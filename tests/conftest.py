import os
import tempfile

# Settings are read at import time, so the environment has to be ready first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("TOKEN_HASH_KEY", "test-token-hash-key")
os.environ.setdefault("PASSWORD_PEPPER", "test-pepper")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ["ADMIN_USERNAME"] = ""
os.environ["ADMIN_PASSWORD"] = ""
os.environ["TOKENAUTH_HOME"] = tempfile.mkdtemp(prefix="tokenauth-cli-")
