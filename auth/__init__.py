# auth/__init__.py
from auth.security import verify_password, get_password_hash, create_access_token, decode_token
