"""
Licensing Workflow Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class ApplicationStatus(str, Enum):
    """Lifecycle stage of a license application"""

    created = "created"
    assigned_to_officer = "assigned_to_officer"
    under_review = "under_review"
    referred_to_oversight = "referred_to_oversight"
    returned_to_dealer = "returned_to_dealer"
    approved = "approved"
    rejected = "rejected"


class TransitionAction(str, Enum):
    """Named operation that moves an application between statuses"""

    CREATE = "CREATE"
    ASSIGN_TO_OFFICER = "ASSIGN_TO_OFFICER"
    START_REVIEW = "START_REVIEW"
    REFER_TO_OVERSIGHT = "REFER_TO_OVERSIGHT"
    ENDORSE = "ENDORSE"
    RETURN_TO_DEALER = "RETURN_TO_DEALER"
    RESUBMIT = "RESUBMIT"
    APPROVE = "APPROVE"
    REJECT = "REJECT"


class ActorRole(str, Enum):
    """Portal role of the actor performing an action"""

    dealer = "dealer"
    firearm_officer = "police.firearmofficer"
    police_oic = "police.oic"
    cfr = "cfr.cfr"
    cfr_dispol = "cfr.dispol"
    cfr_propol = "cfr.propol"
    joc_oic = "joc.oic"
    joc_mid = "joc.mid"
    joc_controller = "joc.controller"
