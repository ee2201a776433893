from pydantic import BaseModel


class SequenceAssignment(BaseModel):
    id: int
    sequence: int
