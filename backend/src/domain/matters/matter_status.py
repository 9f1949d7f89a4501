"""MatterStatus lifecycle and mutation gates for gazette matters.

State flow (publication workflow):
    draft → submitted → under_review → approved → scheduled → published → archived
    submitted / under_review → draft  (submission canceled)
    under_review → rejected → draft   (returned for rework)

Only the mutation gates are enforced here. Transitions themselves are owned by
the matter-editing workflow.
"""

from enum import Enum
from typing import Dict, FrozenSet, Union

from domain.decisions import GuardDecision
from errors import InvalidLifecycleState


class MatterStatus(str, Enum):
    """Matter publication status.

    Values are stored as TEXT in the database and must match exactly.
    """
    DRAFT = "draft"                  # Rascunho
    SUBMITTED = "submitted"          # Enviado para análise
    UNDER_REVIEW = "under_review"    # Em análise pela SEMAD
    APPROVED = "approved"
    REJECTED = "rejected"
    PUBLISHED = "published"
    SCHEDULED = "scheduled"          # Agendado para publicação
    ARCHIVED = "archived"


class MatterOperation(str, Enum):
    """Mutations on a matter's content that are gated by its status."""
    REMOVE_ATTACHMENT = "remove_attachment"


EDITABLE_STATUSES: FrozenSet[MatterStatus] = frozenset({MatterStatus.DRAFT, MatterStatus.SUBMITTED})

MUTATION_GATES: Dict[MatterOperation, FrozenSet[MatterStatus]] = {
    MatterOperation.REMOVE_ATTACHMENT: EDITABLE_STATUSES,
}

NOT_EDITABLE_MESSAGE = (
    "Matéria não está mais em fase editável; "
    "anexos só podem ser removidos em rascunho ou enviada"
)


class LifecycleGuard:
    """Decides whether a mutation is allowed given the owning matter's status.

    Runs strictly after the authorization guard has allowed the request.
    Unknown status strings are denied rather than guessed at.
    """

    def __init__(self, gates: Dict[MatterOperation, FrozenSet[MatterStatus]] = MUTATION_GATES):
        self._gates = gates

    def check_mutation_allowed(
        self,
        matter_status: Union[MatterStatus, str],
        operation: MatterOperation,
    ) -> GuardDecision:
        """Return allow when ``operation`` may run on a matter in ``matter_status``.

        Example:
            >>> LifecycleGuard().check_mutation_allowed("draft", MatterOperation.REMOVE_ATTACHMENT).allowed
            True
            >>> LifecycleGuard().check_mutation_allowed("published", MatterOperation.REMOVE_ATTACHMENT).allowed
            False
        """
        try:
            status = MatterStatus(matter_status)
        except ValueError:
            return GuardDecision.deny(InvalidLifecycleState, NOT_EDITABLE_MESSAGE)

        if status in self._gates.get(operation, frozenset()):
            return GuardDecision.allow()
        return GuardDecision.deny(InvalidLifecycleState, NOT_EDITABLE_MESSAGE)
