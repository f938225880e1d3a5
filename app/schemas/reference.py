from pydantic import BaseModel, Field


class ReferenceIn(BaseModel):
    name: str = Field(..., max_length=100)


class ReferenceOut(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True
