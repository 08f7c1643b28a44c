import requests
from typing import Optional
from .config import BASE_URL, REQUEST_TIMEOUT

def api_login(username: str, password: str) -> Optional[dict]:
    """
    Faz login no backend e devolve {"access_token", "token_type", "expires_at"}.
    """
    url = f"{BASE_URL}/auth/login"
    data = {"username": username, "password": password}
    
    try:
        resp = requests.post(url, json=data, timeout=REQUEST_TIMEOUT)
    except requests.RequestException:
        return None
    if resp.status_code != 200:
        return None
    return resp.json()

def api_logout(token: str) -> bool:
    """
    Faz logout no backend (apaga o token apresentado).
    """
    url = f"{BASE_URL}/auth/logout"
    headers = {"Authorization": f"Bearer {token}"}
    
    try:
        resp = requests.post(url, headers=headers, timeout=REQUEST_TIMEOUT)
    except requests.RequestException:
        return False
    return resp.status_code == 200

def api_logout_all(token: str) -> Optional[int]:
    """
    Apaga todos os tokens do utilizador. Devolve o número de tokens revogados.
    """
    url = f"{BASE_URL}/auth/logout-all"
    headers = {"Authorization": f"Bearer {token}"}

    try:
        resp = requests.post(url, headers=headers, timeout=REQUEST_TIMEOUT)
    except requests.RequestException:
        return None
    if resp.status_code != 200:
        return None
    return resp.json().get("revoked", 0)

def api_get_me(token: str) -> Optional[dict]:
    """
    Obtém a conta associada ao token.
    """
    url = f"{BASE_URL}/users/me"
    headers = {"Authorization": f"Bearer {token}"}

    try:
        resp = requests.get(url, headers=headers, timeout=REQUEST_TIMEOUT)
    except requests.RequestException:
        return None
    if resp.status_code != 200:
        return None
    return resp.json()
