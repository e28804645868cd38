from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from crypto_gateway.database import SessionLocal, session_scope
from crypto_gateway.errors import BackendError
from crypto_gateway.models import SECURITY_TOKEN_FIELDS, SecurityToken
from crypto_gateway.schemas import SecurityTokenDetails, SecurityTokenSymbol


class SecurityTokenStore:
    """Reads security token reference records from the relational store."""

    def __init__(self, session_factory: sessionmaker = SessionLocal, logger: Optional[logging.Logger] = None):
        self._session_factory = session_factory
        self._logger = logger or logging.getLogger(__name__)

    def get_token_details(self, token_symbol: str) -> Optional[SecurityTokenDetails]:
        """Return the first record for ``token_symbol``, or None when there is none."""
        try:
            with session_scope(self._session_factory) as session:
                row = (
                    session.query(SecurityToken)
                    .filter(SecurityToken.token_symbol == token_symbol)
                    .order_by(SecurityToken.id)
                    .first()
                )
                if row is None:
                    return None
                return SecurityTokenDetails(**{field: getattr(row, field) for field in SECURITY_TOKEN_FIELDS})
        except SQLAlchemyError as exc:
            self._logger.error(f"Reference store get_token_details failed: {exc}", extra={"token_symbol": token_symbol})
            raise BackendError("Reference store unavailable") from exc

    def get_all_token_symbols(self) -> list[SecurityTokenSymbol]:
        try:
            with session_scope(self._session_factory) as session:
                rows = (
                    session.query(SecurityToken.token_name, SecurityToken.token_symbol)
                    .order_by(SecurityToken.id)
                    .all()
                )
                return [SecurityTokenSymbol(token_name=name, token_symbol=symbol) for name, symbol in rows]
        except SQLAlchemyError as exc:
            self._logger.error(f"Reference store get_all_token_symbols failed: {exc}")
            raise BackendError("Reference store unavailable") from exc

    def ping(self) -> bool:
        try:
            with session_scope(self._session_factory) as session:
                session.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as exc:
            self._logger.warning(f"Reference store ping failed: {exc}")
            return False
