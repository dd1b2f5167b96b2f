from pydantic import BaseModel, Field
from typing import List

class QuestionAnswer(BaseModel):
    question: str = Field(..., description="The question that was asked about the image")
    answer: str = Field("", description="The answer extracted from the image, or empty string if not found")

class AnalysisResponse(BaseModel):
    results: List[QuestionAnswer]

class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human-readable error message describing what went wrong")

class StatusResponse(BaseModel):
    service: str
    status: str
    version: str
    endpoints: List[str]
