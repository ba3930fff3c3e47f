from pydantic import BaseModel, Field


class Person(BaseModel):
    age: int = Field(..., ge=0, le=255, description='Age in years')
