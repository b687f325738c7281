from dotenv import load_dotenv
from cryptography.fernet import Fernet, InvalidToken
import os
from typing import Optional

from .exceptions import ConfigurationError
from .logging import get_logger

log = get_logger(__name__)


def get_key(key: Optional[str] = None) -> bytes:
    if not key:
        load_dotenv()
        key = os.getenv('ENCRYPTION_KEY')
    if not key:
        raise ConfigurationError("No Encryption Key Specified")
    return key.encode('utf-8')


def encrypt_data(plain_text: str, key: Optional[str] = None) -> str:
    if not plain_text:
        raise ValueError("Cannot encrypt nothing")
    try:
        fernet = Fernet(get_key(key))
    except ValueError as e:
        raise ConfigurationError("Invalid Encryption Key") from e
    return fernet.encrypt(plain_text.encode('utf-8')).decode('utf-8')


def decrypt_data(cipher_text: str, key: Optional[str] = None) -> str:
    if not cipher_text:
        raise ValueError("Cannot decrypt nothing")
    try:
        fernet = Fernet(get_key(key))
    except ValueError as e:
        raise ConfigurationError("Invalid Encryption Key") from e
    try:
        return fernet.decrypt(cipher_text.encode('utf-8')).decode('utf-8')
    except InvalidToken as e:
        log.warning('Invalid decryption token')
        raise ConfigurationError('Invalid or corrupted Cipher Text') from e
