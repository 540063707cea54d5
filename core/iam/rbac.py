"""
Static authorization tables.

Role -> permissions and role -> sections are plain data loaded once at import
time and never mutated. Changing who can do what is a deploy, not a request.
Unknown role keys contribute nothing (fail closed).
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Iterable

CONTENT_TYPES: tuple[str, ...] = (
    "article",
    "news",
    "education",
    "faq",
    "branch",
    "service",
    "insurance",
    "form",
    "hero",
    "page",
)

CONTENT_ACTIONS: tuple[str, ...] = ("read", "create", "update", "delete", "publish")

SECTIONS: tuple[str, ...] = (
    "dashboard",
    "appointments",
    "messages",
    "accounting",
    "staff-management",
    "medicine-inventory",
    "profile",
    "cms",
    "settings",
)

TAXONOMY_MANAGE = "content.taxonomy.manage"
USER_MANAGE = "user.manage"
AUDIT_READ = "audit.read"
AUDIT_PURGE = "audit.purge"

APPT_READ = "appt.read"
APPT_CREATE = "appt.create"
APPT_UPDATE = "appt.update"
APPT_CANCEL = "appt.cancel"
FINANCE_READ = "finance.read"
FINANCE_POST = "finance.post"


def content_permission(content_type: str, action: str) -> str:
    return f"content.{content_type}.{action}"


def _content(*actions: str) -> frozenset[str]:
    return frozenset(content_permission(t, a) for t in CONTENT_TYPES for a in actions)


_APPT_ALL = frozenset({APPT_READ, APPT_CREATE, APPT_UPDATE, APPT_CANCEL})
_FINANCE_ALL = frozenset({FINANCE_READ, FINANCE_POST})

ROLE_LABELS = MappingProxyType({
    "admin": "System administrator",
    "ceo": "Chief executive",
    "internal_manager": "Internal manager",
    "it_manager": "IT manager",
    "doctor": "Doctor",
    "head_nurse": "Head nurse",
    "nurse": "Nurse",
    "receptionist": "Receptionist",
    "appointments_coordinator": "Appointments coordinator",
    "accountant": "Accountant",
    "finance_manager": "Finance manager",
    "cashier": "Cashier",
    "insurance_specialist": "Insurance specialist",
    "content_creator": "Content creator",
    "content_editor": "Content editor",
    "lab_technician": "Lab technician",
    "radiology_technician": "Radiology technician",
    "pharmacist": "Pharmacist",
    "inventory_manager": "Inventory manager",
    "procurement_officer": "Procurement officer",
})

# Who may manage staff accounts, read the activity log and use the CMS.
STAFF_MANAGEMENT_ROLES = frozenset({"admin", "it_manager", "internal_manager", "ceo"})
ACTIVITY_ROLES = frozenset({"it_manager", "ceo", "internal_manager", "admin"})
CMS_ROLES = frozenset({
    "admin", "ceo", "internal_manager", "it_manager", "content_editor", "content_creator",
})

_CMS_FULL = _content(*CONTENT_ACTIONS) | {TAXONOMY_MANAGE}

_BASE_PERMISSIONS = {
    # Leadership & ops
    "admin": _CMS_FULL | _APPT_ALL | _FINANCE_ALL,
    "ceo": _CMS_FULL | {APPT_READ, FINANCE_READ},
    "internal_manager": _CMS_FULL | {APPT_READ, APPT_UPDATE},
    "it_manager": _CMS_FULL,

    # Clinical
    "doctor": frozenset({APPT_READ, APPT_UPDATE}),
    "head_nurse": frozenset({APPT_READ, APPT_UPDATE}),
    "nurse": frozenset({APPT_READ, APPT_UPDATE}),
    "receptionist": frozenset({APPT_READ, APPT_CREATE, APPT_CANCEL}),
    "appointments_coordinator": _APPT_ALL,

    # Finance & insurance
    "accountant": _FINANCE_ALL,
    "finance_manager": _FINANCE_ALL,
    "cashier": _FINANCE_ALL,
    "insurance_specialist": frozenset({APPT_READ}),

    # Content
    "content_creator": _content("read", "create", "update") | {TAXONOMY_MANAGE},
    "content_editor": _content("read", "update", "publish"),

    # Paraclinical / support
    "lab_technician": frozenset({APPT_READ}),
    "radiology_technician": frozenset({APPT_READ}),
    "pharmacist": frozenset({APPT_READ}),
    "inventory_manager": frozenset(),
    "procurement_officer": frozenset(),
}


def _grants(role: str, base: frozenset[str]) -> frozenset[str]:
    perms = set(base)
    if role in STAFF_MANAGEMENT_ROLES:
        perms |= {USER_MANAGE, AUDIT_PURGE}
    if role in ACTIVITY_ROLES:
        perms.add(AUDIT_READ)
    return frozenset(perms)


ROLE_PERMISSIONS = MappingProxyType({role: _grants(role, base) for role, base in _BASE_PERMISSIONS.items()})

_ALL_SECTIONS = frozenset(SECTIONS)

ROLE_SECTIONS = MappingProxyType({
    "admin": _ALL_SECTIONS,
    "ceo": _ALL_SECTIONS,
    "internal_manager": frozenset({
        "dashboard", "appointments", "messages", "medicine-inventory", "profile", "cms", "settings",
    }),
    "it_manager": _ALL_SECTIONS,

    "doctor": frozenset({"dashboard", "appointments", "messages", "profile", "medicine-inventory"}),
    "head_nurse": frozenset({"dashboard", "appointments", "messages", "profile", "medicine-inventory"}),
    "nurse": frozenset({"dashboard", "appointments", "messages", "profile"}),
    "receptionist": frozenset({"dashboard", "appointments", "messages", "profile"}),
    "appointments_coordinator": frozenset({"dashboard", "appointments", "profile"}),

    "accountant": frozenset({"dashboard", "accounting", "profile"}),
    "finance_manager": frozenset({"dashboard", "accounting", "profile"}),
    "cashier": frozenset({"dashboard", "accounting", "profile"}),
    "insurance_specialist": frozenset({"dashboard", "appointments", "messages", "profile"}),

    "content_creator": frozenset({"dashboard", "cms", "messages", "profile"}),
    "content_editor": frozenset({"dashboard", "cms", "messages", "profile"}),

    "lab_technician": frozenset({"dashboard", "appointments", "messages", "profile"}),
    "radiology_technician": frozenset({"dashboard", "appointments", "messages", "profile"}),
    "pharmacist": frozenset({"dashboard", "messages", "profile", "medicine-inventory"}),
    "inventory_manager": frozenset({"dashboard", "messages", "medicine-inventory", "profile"}),
    "procurement_officer": frozenset({"dashboard", "messages", "profile"}),
})


def _union(table, roles: Iterable[str] | None) -> frozenset[str]:
    out: set[str] = set()
    for role in roles or ():
        out |= table.get(role, frozenset())
    return frozenset(out)


def permissions_for(roles: Iterable[str] | None) -> frozenset[str]:
    return _union(ROLE_PERMISSIONS, roles)


def sections_for(roles: Iterable[str] | None) -> frozenset[str]:
    return _union(ROLE_SECTIONS, roles)


def is_known_role(role: str) -> bool:
    return role in ROLE_LABELS
