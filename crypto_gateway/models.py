"""
Database models for the relational reference store.
Defines the schema for security token records.
"""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Descriptive columns, in the order they are exposed to clients.
SECURITY_TOKEN_FIELDS = (
    "token_name",
    "token_status",
    "token_symbol",
    "industry",
    "amount_raised",
    "currency",
    "issuance_price",
    "min_invest",
    "closing_date",
    "target_investor_type",
    "jurisdictions_avail",
    "restricted_area",
    "secondary_market",
    "website",
    "whitepaper",
    "prospectus",
    "smart_contract",
    "github",
    "blockchain",
    "issuer_address",
    "token_used",
    "dividend",
    "voting",
    "equity_ownership",
    "mme_class",
    "interest",
    "portfolio",
)


class SecurityToken(Base):
    """Reference record describing one security token offering."""
    __tablename__ = "SecurityTokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token_name = Column(String(200))
    token_status = Column(String(100))
    token_symbol = Column(String(20), nullable=False, index=True)
    industry = Column(String(200))
    amount_raised = Column(String(100))
    currency = Column(String(20))
    issuance_price = Column(String(100))
    min_invest = Column(String(100))
    closing_date = Column(String(50))
    target_investor_type = Column(String(200))
    jurisdictions_avail = Column(String(500))
    restricted_area = Column(String(500))
    secondary_market = Column(String(200))
    website = Column(String(500))
    whitepaper = Column(String(500))
    prospectus = Column(String(500))
    smart_contract = Column(String(200))
    github = Column(String(500))
    blockchain = Column(String(100))
    issuer_address = Column(String(500))
    token_used = Column(String(200))
    dividend = Column(String(100))
    voting = Column(String(100))
    equity_ownership = Column(String(100))
    mme_class = Column(String(100))
    interest = Column(String(100))
    portfolio = Column(String(200))

    def __repr__(self):
        return f"<SecurityToken(token_symbol={self.token_symbol}, token_name={self.token_name})>"
