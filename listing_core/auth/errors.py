"""
Translation of authentication provider errors into user-facing messages.
"""
import logging
from typing import Any, Mapping


logger = logging.getLogger(__name__)


MSG_UNKNOWN = 'Ocorreu um erro desconhecido.'
MSG_GENERIC = 'Erro ao realizar autenticação. Tente novamente.'
MSG_PROFILE_SAVE = 'Erro ao salvar perfil. Verifique seus dados e tente novamente.'

DATABASE_SAVE_ERROR = 'Database error saving new user'

# Checked in order, first match wins
AUTH_ERROR_MESSAGES = [
    ('Invalid login credentials', 'Email ou senha inválidos. Verifique seus dados.'),
    ('User already registered', 'Este email já está cadastrado. Tente fazer login.'),
    ('Password should be at least', 'A senha deve ter pelo menos 6 caracteres.'),
    ('Email not confirmed', 'Este email ainda não foi confirmado. Verifique sua caixa de entrada.'),
    ('Too many requests', 'Muitas tentativas em pouco tempo. Tente novamente mais tarde.'),
    ('Email address not found', 'Este endereço de email não foi encontrado.'),
]

# Duplicate-field messages raised by the sign-up trigger, wrapped in DATABASE_SAVE_ERROR
DUPLICATE_FIELD_MESSAGES = [
    ('CPF já cadastrado', 'CPF já cadastrado por outro usuário.'),
    ('Email já cadastrado', 'Email já cadastrado por outro usuário.'),
    ('WhatsApp já cadastrado', 'WhatsApp já cadastrado por outro usuário.'),
    ('Slug já cadastrado', 'Este nome de página já está em uso.'),
]


def _extract_message(error: Any) -> str:
    if isinstance(error, str):
        return error

    if isinstance(error, Mapping):
        message = error.get('message')
    else:
        message = getattr(error, 'message', None)
        if message is None and isinstance(error, Exception):
            message = str(error)

    return message if isinstance(message, str) else ''


def translate_auth_error(error: Any) -> str:
    """
    Turn an authentication error into a message for the user.

    Args:
        error: Error string, exception, mapping with a 'message' key, or
            any object with a ``message`` attribute

    Returns:
        Translated message, the original message if no rule matches, or a
        generic message when there is nothing to show
    """
    if not error:
        return MSG_UNKNOWN

    message = _extract_message(error)

    for phrase, translated in AUTH_ERROR_MESSAGES:
        if phrase in message:
            return translated

    if DATABASE_SAVE_ERROR in message:
        for phrase, translated in DUPLICATE_FIELD_MESSAGES:
            if phrase in message:
                return translated
        return MSG_PROFILE_SAVE

    if message:
        logger.debug(f"No translation for auth error: {message[:200]}")
        return message

    return MSG_GENERIC
