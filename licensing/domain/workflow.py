"""
Application Workflow

Transition table for license applications and the pure rules that decide
whether an actor may apply an action. No I/O happens here; the use cases
read the current row, ask the engine, then persist what it resolved.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from licensing.domain.entities import (
    ActorRole,
    Application,
    ApplicationEvent,
    ApplicationStatus,
    TransitionAction,
)
from licensing.domain.errors import ForbiddenError, IllegalTransitionError, IntegrityError
from licensing.libs.result import Result, Return

OVERSIGHT_ROLES = frozenset(
    {
        ActorRole.cfr,
        ActorRole.cfr_dispol,
        ActorRole.cfr_propol,
        ActorRole.joc_oic,
        ActorRole.joc_mid,
    }
)

TERMINAL_STATUSES = frozenset({ApplicationStatus.approved, ApplicationStatus.rejected})


@dataclass(frozen=True)
class Actor:
    """Authenticated identity supplied by the identity provider"""

    email: str
    role: ActorRole


@dataclass(frozen=True)
class TransitionRule:
    """
    One entry of the transition table.

    Attributes:
        from_status: Status the application must currently be in
        action: Action name requested by the caller
        to_status: Status the application moves to
        roles: Roles allowed to apply the action
        assigned_officer_only: Actor must be the application's officer
        submitter_only: Actor must be the dealer who submitted the application
    """

    from_status: ApplicationStatus
    action: TransitionAction
    to_status: ApplicationStatus
    roles: FrozenSet[ActorRole]
    assigned_officer_only: bool = False
    submitter_only: bool = False


class TransitionTable:
    """Mapping (current_status, action) -> TransitionRule"""

    def __init__(self, rules: Iterable[TransitionRule]):
        self._rules: Dict[Tuple[ApplicationStatus, TransitionAction], TransitionRule] = {}
        for rule in rules:
            key = (rule.from_status, rule.action)
            if key in self._rules:
                raise ValueError(f"Duplicate transition for {rule.from_status.value}/{rule.action.value}")
            if rule.from_status in TERMINAL_STATUSES:
                raise ValueError(f"Terminal status {rule.from_status.value} cannot have transitions")
            self._rules[key] = rule

    def get(
        self, status: ApplicationStatus, action: TransitionAction
    ) -> Optional[TransitionRule]:
        return self._rules.get((status, action))

    def rules_from(self, status: ApplicationStatus) -> List[TransitionRule]:
        return [rule for (from_status, _), rule in self._rules.items() if from_status == status]

    def __iter__(self):
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)


DEFAULT_TRANSITIONS = TransitionTable(
    [
        TransitionRule(
            ApplicationStatus.created,
            TransitionAction.ASSIGN_TO_OFFICER,
            ApplicationStatus.assigned_to_officer,
            frozenset({ActorRole.dealer}),
        ),
        TransitionRule(
            ApplicationStatus.assigned_to_officer,
            TransitionAction.START_REVIEW,
            ApplicationStatus.under_review,
            frozenset({ActorRole.firearm_officer}),
            assigned_officer_only=True,
        ),
        TransitionRule(
            ApplicationStatus.under_review,
            TransitionAction.REFER_TO_OVERSIGHT,
            ApplicationStatus.referred_to_oversight,
            frozenset({ActorRole.firearm_officer, ActorRole.police_oic}),
        ),
        TransitionRule(
            ApplicationStatus.referred_to_oversight,
            TransitionAction.ENDORSE,
            ApplicationStatus.under_review,
            OVERSIGHT_ROLES,
        ),
        TransitionRule(
            ApplicationStatus.referred_to_oversight,
            TransitionAction.REJECT,
            ApplicationStatus.rejected,
            OVERSIGHT_ROLES | {ActorRole.joc_controller},
        ),
        TransitionRule(
            ApplicationStatus.under_review,
            TransitionAction.RETURN_TO_DEALER,
            ApplicationStatus.returned_to_dealer,
            frozenset({ActorRole.firearm_officer, ActorRole.police_oic}),
        ),
        TransitionRule(
            ApplicationStatus.returned_to_dealer,
            TransitionAction.RESUBMIT,
            ApplicationStatus.assigned_to_officer,
            frozenset({ActorRole.dealer}),
            submitter_only=True,
        ),
        TransitionRule(
            ApplicationStatus.under_review,
            TransitionAction.APPROVE,
            ApplicationStatus.approved,
            frozenset({ActorRole.police_oic, ActorRole.joc_controller}),
        ),
        TransitionRule(
            ApplicationStatus.under_review,
            TransitionAction.REJECT,
            ApplicationStatus.rejected,
            frozenset(
                {ActorRole.firearm_officer, ActorRole.police_oic, ActorRole.joc_controller}
            ),
        ),
    ]
)


def same_identity(left: Optional[str], right: Optional[str]) -> bool:
    return bool(left) and bool(right) and left.strip().lower() == right.strip().lower()


class TransitionEngine:
    """
    Decides legality and authorization of status changes.

    Legality is checked before role and identity authorization.
    """

    def __init__(self, table: TransitionTable = DEFAULT_TRANSITIONS):
        self.table = table

    @property
    def submission_rule(self) -> TransitionRule:
        rule = self.table.get(ApplicationStatus.created, TransitionAction.ASSIGN_TO_OFFICER)
        if rule is None:
            raise ValueError("Transition table has no created/ASSIGN_TO_OFFICER entry")
        return rule

    def authorize_submission(self, actor: Actor) -> Result[TransitionRule]:
        rule = self.submission_rule
        if actor.role not in rule.roles:
            return Return.err(
                ForbiddenError(f"Role {actor.role.value} cannot submit applications")
            )
        return Return.ok(rule)

    def resolve(
        self, application: Application, action: TransitionAction, actor: Actor
    ) -> Result[TransitionRule]:
        """
        Resolve the rule for applying action to application as actor.

        Returns:
            Result[TransitionRule], or IllegalTransitionError / ForbiddenError
        """
        current = ApplicationStatus(application.status)
        rule = self.table.get(current, action)
        if rule is None:
            return Return.err(
                IllegalTransitionError(
                    f"Action {action.value} is not allowed from status {current.value}"
                )
            )

        if actor.role not in rule.roles:
            return Return.err(
                ForbiddenError(f"Role {actor.role.value} cannot perform {action.value}")
            )

        if rule.assigned_officer_only and not same_identity(
            actor.email, application.officer_email
        ):
            return Return.err(
                ForbiddenError("Only the assigned officer can perform this action")
            )

        if rule.submitter_only and not same_identity(
            actor.email, application.created_by_email
        ):
            return Return.err(
                ForbiddenError("Only the submitting dealer can perform this action")
            )

        return Return.ok(rule)

    def available_actions(
        self, application: Application, actor: Actor
    ) -> List[TransitionAction]:
        """Actions the actor could apply right now, in table order"""
        current = ApplicationStatus(application.status)
        return [
            rule.action
            for rule in self.table.rules_from(current)
            if self.resolve(application, rule.action, actor).is_ok()
        ]


def verify_chain(
    application: Application, events: Sequence[ApplicationEvent]
) -> Result[None]:
    """
    Check that ordered events reconstruct the application's current status.

    Rules:
    - at least one event, the first with from_status = null
    - each from_status equals the previous to_status
    - last to_status equals application.status
    - event count equals application.version
    """
    uid = application.application_uid

    if not events:
        return Return.err(IntegrityError(f"Application {uid} has no events"))

    if events[0].from_status is not None:
        return Return.err(
            IntegrityError(f"First event of application {uid} has a from_status")
        )

    for previous, current in zip(events, events[1:]):
        if current.from_status != previous.to_status:
            return Return.err(
                IntegrityError(
                    f"Event chain of application {uid} breaks at event {current.id}"
                )
            )

    status = ApplicationStatus(application.status).value
    if events[-1].to_status != status:
        return Return.err(
            IntegrityError(
                f"Application {uid} status {status} does not match its last event"
            )
        )

    if len(events) != application.version:
        return Return.err(
            IntegrityError(
                f"Application {uid} version {application.version} does not match "
                f"{len(events)} recorded events"
            )
        )

    return Return.ok(None)


def authorize_view(application: Application, viewer: Optional[Actor]) -> Result[None]:
    """Dealers only see the applications they submitted"""
    if viewer is None or viewer.role != ActorRole.dealer:
        return Return.ok(None)
    if not same_identity(viewer.email, application.created_by_email):
        return Return.err(ForbiddenError("You can only view applications you submitted"))
    return Return.ok(None)
