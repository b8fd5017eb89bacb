from typing import Any

from pydantic import BaseModel, Field


class StartProcessingRequest(BaseModel):
    csvData: list[Any] = Field(default_factory=list)
    txtData: str = ""


class ProcessingUpdate(BaseModel):
    status: str | None = None
    report: str


class ProcessingComplete(BaseModel):
    finalData: list[dict[str, Any]]
    report: str


class ProcessingError(BaseModel):
    message: str
    error: str
