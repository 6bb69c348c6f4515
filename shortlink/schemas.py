from pydantic import BaseModel, Field

class ShortLinkEntry(BaseModel):
    token: str = Field(min_length=1)
    long_url: str
