"""
Public participation audit.

Every finding is a function of the evidence supplied with the request:
public hearing, NEMA (environmental authority) approval and incorporation
of community feedback.
"""

from __future__ import annotations

from typing import Optional

from infrashadows.models.schemas import EvidenceRecord, ParticipationResult

# (evidence flag, process reported missing when the flag is False)
REQUIRED_PROCESSES: tuple[tuple[str, str], ...] = (
    ("public_hearing_held", "Public Hearing"),
    ("nema_approval", "Environmental Impact Assessment"),
    ("community_feedback_incorporated", "Community Feedback Session"),
)


def clean_evidence_links(links: list[str]) -> list[str]:
    """Keep http(s) links only, stripped and de-duplicated in order."""
    cleaned: list[str] = []
    for link in links:
        link = link.strip()
        if not link.lower().startswith(("http://", "https://")):
            continue
        if link not in cleaned:
            cleaned.append(link)
    return cleaned


def audit_participation(evidence: Optional[EvidenceRecord] = None) -> ParticipationResult:
    evidence = evidence or EvidenceRecord()
    missing = [
        process for flag, process in REQUIRED_PROCESSES
        if not getattr(evidence, flag)
    ]
    return ParticipationResult(
        public_hearing_held=evidence.public_hearing_held,
        nema_approval=evidence.nema_approval,
        community_feedback_incorporated=evidence.community_feedback_incorporated,
        evidence_links=clean_evidence_links(evidence.evidence_links),
        missing_processes=missing,
    )
