from typing import Optional
from pydantic import BaseModel


class PostalCodeLookup(BaseModel):
    postal_code: str
    street_name: Optional[str] = None
    area: Optional[str] = None
    district: Optional[str] = None
