# tokencli/core/config.py
from pathlib import Path
import os

# URL do backend FastAPI
BASE_URL = os.environ.get("TOKENAUTH_URL", "http://localhost:8000")

# Pasta onde a CLI vai guardar dados locais (token, etc.)
APP_DIR = Path(os.environ.get("TOKENAUTH_HOME", str(Path.home() / ".tokenauth")))

# Ficheiro onde vamos guardar o token de sessão
SESSION_FILE = APP_DIR / "session.json"

# Timeout (segundos) dos pedidos HTTP
REQUEST_TIMEOUT = float(os.environ.get("TOKENAUTH_TIMEOUT", "5"))
