from typing import Optional

from pydantic import BaseModel


class ProblemRecord(BaseModel):
    """External, serializable form of a Problem tied to its file"""

    path: str
    line: int
    column: int
    severity: str
    rule: str
    message: str
    suggestion: Optional[str] = None
