# ==============================================================================
# SERVICIO DE AUTENTICACIÓN
# ==============================================================================
# Centraliza registro, login y verificación de tokens.
#
# - Contraseñas: hash con sal e irreversible (werkzeug.security)
# - Tokens: JWT firmados {sub=user_id, role, exp} (flask_jwt_extended)
# - Sin estado en servidor: cada petición se verifica por firma y expiración
#
# REGLA: login con email inexistente o contraseña incorrecta produce
# EXACTAMENTE el mismo error ("Invalid credentials").
# ==============================================================================

import logging
from datetime import timedelta
from typing import Any, Dict, Tuple

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from werkzeug.security import check_password_hash, generate_password_hash

from sweet_shop.models import RequestIdentity, User, UserRole, VALID_ROLES, new_id, utc_now
from sweet_shop.repositories.interfaces import IUserRepository
from sweet_shop.services.errors import DuplicateEmail, InvalidCredentials, InvalidToken
from sweet_shop.services.validators import (
    FieldErrors,
    MIN_PASSWORD_LENGTH,
    clean_text,
    is_valid_email,
    normalize_email,
)

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_EXPIRES = timedelta(days=7)


class AuthService:
    """
    Servicio de autenticación.

    Responsabilidades:
    - Registro de usuarios (email único, contraseña hasheada)
    - Login y emisión de tokens
    - Verificación de tokens y resolución de la identidad de una petición

    Los métodos que emiten o verifican tokens necesitan un contexto de
    aplicación Flask activo (JWTManager inicializado).
    """

    def __init__(
        self,
        user_repo: IUserRepository,
        token_expires: timedelta = DEFAULT_TOKEN_EXPIRES
    ):
        """
        Args:
            user_repo: Repositorio de usuarios
            token_expires: Ventana de validez de los tokens emitidos
        """
        self.user_repo = user_repo
        self.token_expires = token_expires

    # =========================================================================
    # REGISTRO Y LOGIN
    # =========================================================================

    def register(
        self,
        email: Any,
        password: Any,
        name: Any,
        role: Any = None
    ) -> Tuple[User, str]:
        """
        Registra un usuario nuevo.

        Returns:
            Tupla (usuario, token)

        Raises:
            ValidationFailed: datos mal formados
            DuplicateEmail: el email ya está registrado
        """
        errors = FieldErrors()
        if not is_valid_email(email):
            errors.add('email', 'Please provide a valid email')
        if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
            errors.add('password', f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
        if not isinstance(name, str) or not name.strip():
            errors.add('name', 'Name is required')
        if role is not None and (not isinstance(role, str) or role not in VALID_ROLES):
            errors.add('role', 'Role must be one of: ' + ', '.join(sorted(VALID_ROLES)))
        errors.raise_if_any()

        email = normalize_email(email)
        if self.user_repo.email_exists(email):
            raise DuplicateEmail()

        now = utc_now()
        user = User(
            id=new_id(),
            email=email,
            password_hash=generate_password_hash(password),
            name=clean_text(name),
            role=UserRole(role or UserRole.USER.value),
            created_at=now,
            updated_at=now,
        )

        # Segunda verificación dentro de la transacción del repositorio
        if not self.user_repo.create_user(user.to_dict()):
            raise DuplicateEmail()

        logger.info("Usuario registrado: %s (%s)", user.email, user.role.value)
        return user, self.generate_token(user.id, user.role.value)

    def login(self, email: Any, password: Any) -> Tuple[User, str]:
        """
        Autentica un usuario.

        Returns:
            Tupla (usuario, token)

        Raises:
            ValidationFailed: email mal formado o contraseña vacía
            InvalidCredentials: email desconocido o contraseña incorrecta
        """
        errors = FieldErrors()
        if not is_valid_email(email):
            errors.add('email', 'Please provide a valid email')
        if not isinstance(password, str) or not password:
            errors.add('password', 'Password is required')
        errors.raise_if_any()

        record = self.user_repo.get_by_email(normalize_email(email))
        if not record or not check_password_hash(record.get('password', ''), password):
            logger.info("Login fallido para %s", normalize_email(email))
            raise InvalidCredentials()

        user = User.from_dict(record)
        logger.info("Inicio de sesión: %s", user.email)
        return user, self.generate_token(user.id, user.role.value)

    # =========================================================================
    # TOKENS
    # =========================================================================

    def generate_token(self, user_id: str, role: str, expires: timedelta = None) -> str:
        """Firma un token {sub=user_id, role} con la expiración configurada."""
        return create_access_token(
            identity=user_id,
            additional_claims={'role': role},
            expires_delta=expires or self.token_expires,
        )

    def verify_token(self, token: str) -> Dict[str, str]:
        """
        Verifica firma y expiración.

        Returns:
            Claims decodificados {'user_id', 'role'}

        Raises:
            InvalidToken: firma inválida, token expirado o mal formado
        """
        try:
            claims = decode_token(token)
        except (PyJWTError, JWTExtendedException) as exc:
            logger.debug("Token rechazado: %s", exc)
            raise InvalidToken() from exc
        return {'user_id': claims['sub'], 'role': claims.get('role', UserRole.USER.value)}

    def resolve_identity(self, token: str) -> RequestIdentity:
        """
        Convierte un token en la identidad de la petición.

        Además de la firma, exige que el usuario siga existiendo.

        Raises:
            InvalidToken: token inválido o usuario inexistente
        """
        claims = self.verify_token(token)
        record = self.user_repo.get_user(claims['user_id'])
        if not record:
            raise InvalidToken('Invalid token')
        return RequestIdentity(
            user_id=claims['user_id'],
            email=record.get('email', ''),
            role=claims.get('role') or record.get('role', UserRole.USER.value),
        )
