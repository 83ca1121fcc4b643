from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ReportLine(BaseModel):
    text: str
    is_bullet: bool = False


class ReportSection(BaseModel):
    title: str
    content: str
    is_banner: bool = False
    lines: list[ReportLine] = []


class AuditReport(BaseModel):
    transcript_id: str
    name: str
    timestamp: datetime
    generated_at: datetime
    sections: list[ReportSection]
