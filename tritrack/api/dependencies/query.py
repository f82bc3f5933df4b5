from fastapi import Depends
from sqlalchemy.orm import Session

from tritrack.db.query_client import QueryClient
from tritrack.db.session import get_db


def get_query_client(db: Session = Depends(get_db)) -> QueryClient:
    """FastAPI dependency providing a query client bound to the request's session."""
    return QueryClient(db)
