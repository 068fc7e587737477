"""Compliance guidance collaborator. Simulated: answers from a fixed rule book, no external calls."""

import json
import logging
from collections import deque
from typing import Optional, Protocol

from record_portal.domain.models.record import CitizenRecord, RecordStatus

logger = logging.getLogger(__name__)

RECENT_PROMPT_LIMIT = 20


class GuidanceUnavailableError(Exception):
    """Raised by a guidance client that cannot produce an answer."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class GuidanceClient(Protocol):
    """Opaque guidance service: free-text query plus record context in, prose out."""

    async def generate(self, query: str, record: Optional[CitizenRecord]) -> str:
        ...


def record_context(record: Optional[CitizenRecord]) -> dict:
    """Record fields shared with the assistant. The photo is never sent."""
    if record is None:
        return {}
    return {
        "id": record.id,
        "name": record.name,
        "nin": record.nin,
        "phoneNumber": record.phone_number,
        "gender": record.gender.value,
        "stateOfOrigin": record.state_of_origin,
        "localGovernmentArea": record.local_government_area,
        "status": record.status.value,
        "lastModified": record.last_modified.isoformat(),
        "modificationCount": len(record.modification_history),
    }


def build_prompt(query: str, record: Optional[CitizenRecord]) -> str:
    return (
        "You are an internal NIMC (National Identity Management Commission) compliance assistant.\n"
        "Help the agent with their query regarding data modification policies in Nigeria.\n\n"
        "Context of current record being viewed:\n"
        f"{json.dumps(record_context(record), indent=2)}\n\n"
        f"User Query: {query}\n\n"
        "Provide a concise, professional response based on Nigerian data protection laws (NDPR) "
        "and NIMC standard operating procedures."
    )


_RULES = (
    (
        ("phone", "number", "msisdn", "sim"),
        "Phone number updates must use the +234 format followed by 10 digits. "
        "Confirm the new line is registered to the citizen before syncing and "
        "record the justification in the modification notes.",
    ),
    (
        ("nin", "identification"),
        "A NIN is issued once and is not reassigned. Corrections require evidence of a "
        "data-entry error and must be escalated to an enrolment supervisor.",
    ),
    (
        ("lga", "local government", "address", "relocat"),
        "Location changes (LGA or residential address) require proof of residence. "
        "Note the supporting document in the modification notes.",
    ),
    (
        ("name", "spelling"),
        "Name changes require a sworn affidavit or a marriage certificate. "
        "Minor spelling corrections still need a documented justification.",
    ),
    (
        ("photo", "biometric", "capture", "picture"),
        "Photo recapture must be done in person with the citizen present. "
        "Do not upload images obtained from third parties.",
    ),
    (
        ("ndpr", "privacy", "consent", "share", "disclos"),
        "Under the NDPR, citizen data may only be processed for the stated purpose. "
        "Do not disclose record details outside authorised channels.",
    ),
)

_DEFAULT_ANSWER = (
    "Follow NIMC standard operating procedure: verify the citizen's identity, "
    "capture supporting evidence and document every change in the modification notes."
)


class SimulatedGuidanceClient:
    """
    Rule-book stand-in for the hosted language model. Keeps the most recent
    prompts it was asked (for tests) and never calls out of process.
    """

    def __init__(self, prompt_limit: int = RECENT_PROMPT_LIMIT) -> None:
        self._prompts: deque[str] = deque(maxlen=prompt_limit)

    async def generate(self, query: str, record: Optional[CitizenRecord]) -> str:
        prompt = build_prompt(query, record)
        self._prompts.append(prompt)
        lowered = query.lower()
        answers = [answer for keywords, answer in _RULES if any(k in lowered for k in keywords)]
        body = " ".join(answers) if answers else _DEFAULT_ANSWER
        if record is not None and record.status == RecordStatus.FLAGGED:
            body += f" Record {record.id} is flagged: obtain supervisor approval before any change."
        logger.debug("guidance_generated", extra={"prompt_chars": len(prompt)})
        return body

    def get_prompts(self) -> list[str]:
        """Return the most recent prompts received, oldest first (for tests)."""
        return list(self._prompts)
