"""Hierarquia de erros da aplicação e seus códigos HTTP."""

from typing import Any, Dict, Optional


class AppError(Exception):
    """Erro base; cada subclasse define o status HTTP correspondente."""
    status_code: int = 500
    default_message: str = "Erro interno do servidor"

    def __init__(self, message: Optional[str] = None, details: Optional[str] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(AppError):
    status_code = 400
    default_message = "Dados inválidos"


class NoFieldsToUpdate(ValidationError):
    default_message = "Nenhum campo para atualizar"


class AuthenticationError(AppError):
    status_code = 401
    default_message = "Não autenticado"


class InvalidCredentials(AuthenticationError):
    default_message = "Usuário ou senha inválidos"


class InvalidOrExpiredToken(AuthenticationError):
    default_message = "Token inválido ou expirado"


class MissingToken(AuthenticationError):
    default_message = "Token não fornecido"


class MalformedToken(AuthenticationError):
    default_message = "Token mal formatado"


class AuthorizationError(AppError):
    status_code = 403
    default_message = "Acesso negado"


class Forbidden(AuthorizationError):
    default_message = "Acesso negado. Nível de permissão insuficiente."


class NotFoundError(AppError):
    status_code = 404
    default_message = "Registro não encontrado"


class ConflictError(AppError):
    status_code = 409
    default_message = "Operação não permitida no estado atual"


class ControladoriaRequired(ConflictError):
    default_message = "A controladoria deve autorizar primeiro"


class AlreadyReleased(ConflictError):
    default_message = "Autorização já liberada pela diretoria"


class AlreadyApproved(ConflictError):
    default_message = "Autorização já aprovada não pode ser alterada"


class AlreadyExists(ConflictError):
    default_message = "Registro já existe"


class InternalError(AppError):
    status_code = 500
