"""Turn a raw audit completion into titled sections for display and print.

Parsing is best effort: the model is asked for ``## ``-delimited headings,
but nothing here fails on output that ignores the layout. Text without any
heading marker simply yields no sections.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from auditpro.llm.prompts.audit import COMPLIANCE_BANNER, SNAPSHOT_BANNER
from auditpro.schemas.report import AuditReport, ReportLine, ReportSection
from auditpro.utils.exceptions import TranscriptNotCompletedError

if TYPE_CHECKING:
    from auditpro.models.transcript import TranscriptEntry

SECTION_MARKER = "## "
TITLE_RULE = "---"
BANNER_TITLES = (SNAPSHOT_BANNER, COMPLIANCE_BANNER)


def parse_sections(raw: str) -> list[ReportSection]:
    sections: list[ReportSection] = []
    # Anything before the first marker is preamble, not a section.
    for fragment in raw.split(SECTION_MARKER)[1:]:
        if not fragment.strip():
            continue
        lines = fragment.split("\n")
        title = lines[0].replace(TITLE_RULE, "").strip()
        content = "\n".join(lines[1:]).strip()
        sections.append(ReportSection(title=title, content=content))
    return sections


def is_banner(title: str) -> bool:
    return any(banner in title for banner in BANNER_TITLES)


def render_lines(content: str) -> list[ReportLine]:
    rendered: list[ReportLine] = []
    for line in content.split("\n"):
        stripped = line.strip()
        if stripped.startswith("-"):
            rendered.append(ReportLine(text=stripped[1:].strip(), is_bullet=True))
        else:
            rendered.append(ReportLine(text=line, is_bullet=False))
    return rendered


def build_report(entry: TranscriptEntry) -> AuditReport:
    """Render a completed entry's result into an ``AuditReport``.

    Banner sections carry no lines; their content arrives as the following
    sections.
    """
    if entry.result is None:
        raise TranscriptNotCompletedError(
            f"Transcript {entry.id} has no completed audit (status: {entry.status})"
        )

    sections = []
    for section in parse_sections(entry.result):
        banner = is_banner(section.title)
        sections.append(
            section.model_copy(
                update={
                    "is_banner": banner,
                    "lines": [] if banner else render_lines(section.content),
                }
            )
        )

    return AuditReport(
        transcript_id=entry.id,
        name=entry.name,
        timestamp=entry.timestamp,
        generated_at=datetime.now(timezone.utc),
        sections=sections,
    )
