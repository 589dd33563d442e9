# services/authorization.py
"""
Single authorization policy for every resource.

A grant maps (resource, action) to the roles allowed. Manager grants are
scoped: a manager only reaches records whose owning property they
manage (Property.manager_id). Controllers call ``authorize`` for single
records and ``scope_query`` for lists; nothing else checks roles.
"""
import enum
from typing import Dict, FrozenSet, List, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Query, Session

from exceptions import AuthorizationError, NotFoundError
from models import Expense, Floor, Local, Property, User, UserRole


class Action(str, enum.Enum):
     READ = "read"
     CREATE = "create"
     UPDATE = "update"
     DELETE = "delete"
     RESTORE = "restore"
     UPDATE_STATUS = "update_status"
     ASSIGN_MANAGER = "assign_manager"
     TRIGGER = "trigger"
     REPORT = "report"


A = UserRole.ADMIN
M = UserRole.MANAGER
E = UserRole.EMPLOYEE


class Grant:
     def __init__(self, *roles: UserRole, scoped: bool = True):
          self.roles: FrozenSet[UserRole] = frozenset(roles)
          # Only manager grants are ever narrowed to managed properties
          self.scoped = scoped and M in self.roles

     def __repr__(self):
          return f"<Grant(roles={sorted(r.value for r in self.roles)}, scoped={self.scoped})>"


POLICY: Dict[Tuple[str, Action], Grant] = {
     ("property", Action.READ): Grant(A, M),
     ("property", Action.CREATE): Grant(A),
     ("property", Action.UPDATE): Grant(A),
     ("property", Action.DELETE): Grant(A),
     ("property", Action.RESTORE): Grant(A),
     ("property", Action.ASSIGN_MANAGER): Grant(A),

     ("floor", Action.READ): Grant(A, M),
     ("floor", Action.UPDATE): Grant(A),
     ("floor", Action.DELETE): Grant(A),
     ("floor", Action.RESTORE): Grant(A),

     ("local", Action.READ): Grant(A, M),
     ("local", Action.CREATE): Grant(A),
     ("local", Action.UPDATE): Grant(A),
     ("local", Action.DELETE): Grant(A),
     ("local", Action.RESTORE): Grant(A),
     ("local", Action.UPDATE_STATUS): Grant(A, M, E),

     ("tenant", Action.READ): Grant(A, M, scoped=False),
     ("tenant", Action.CREATE): Grant(A, M, scoped=False),
     ("tenant", Action.UPDATE): Grant(A, M, scoped=False),
     ("tenant", Action.DELETE): Grant(A, M, scoped=False),
     ("tenant", Action.RESTORE): Grant(A),

     ("lease", Action.READ): Grant(A, M),
     ("lease", Action.CREATE): Grant(A, M),
     ("lease", Action.UPDATE): Grant(A, M),
     ("lease", Action.DELETE): Grant(A, M),
     ("lease", Action.RESTORE): Grant(A),
     ("lease", Action.TRIGGER): Grant(A),
     ("lease", Action.REPORT): Grant(A, M),

     ("payment", Action.READ): Grant(A, M),
     ("payment", Action.CREATE): Grant(A, M),
     ("payment", Action.UPDATE): Grant(A, M),
     ("payment", Action.DELETE): Grant(A, M),
     ("payment", Action.RESTORE): Grant(A),
     ("payment", Action.TRIGGER): Grant(A),

     ("payment_mode", Action.READ): Grant(A, M, E, scoped=False),
     ("payment_mode", Action.CREATE): Grant(A),
     ("payment_mode", Action.UPDATE): Grant(A),
     ("payment_mode", Action.DELETE): Grant(A),
     ("payment_mode", Action.RESTORE): Grant(A),

     ("expense", Action.READ): Grant(A, M),
     ("expense", Action.CREATE): Grant(A, M),
     ("expense", Action.UPDATE): Grant(A, M),
     ("expense", Action.DELETE): Grant(A),
     ("expense", Action.RESTORE): Grant(A),

     # Everyone reads their own notifications; this grant covers everyone else's
     ("notification", Action.READ): Grant(A),

     ("user", Action.READ): Grant(A),
     ("user", Action.CREATE): Grant(A),
     ("user", Action.UPDATE): Grant(A),
}

NOT_FOUND_MESSAGES = {
     "property": "Property not found",
     "floor": "Floor not found",
     "local": "Local not found",
     "lease": "Lease not found",
     "payment": "Payment not found",
     "expense": "Expense not found",
}


def is_allowed(user: User, resource: str, action: Action) -> bool:
     grant = POLICY.get((resource, action))
     return grant is not None and user.role in grant.roles


def is_scoped(user: User, resource: str, action: Action) -> bool:
     """True when the user's grant is limited to properties they manage."""
     grant = POLICY.get((resource, action))
     return grant is not None and grant.scoped and user.role == UserRole.MANAGER


def authorize(user: User, resource: str, action: Action, obj=None) -> None:
     """
     Raise unless ``user`` may perform ``action`` on ``resource``.

     Role mismatch is a 403. With ``obj`` under a scoped grant, a manager
     outside the owning property gets a 404 so the record's existence is
     not revealed.
     """
     if not is_allowed(user, resource, action):
          raise AuthorizationError(
               f"Role '{user.role.value}' is not allowed to {action.value.replace('_', ' ')} {resource.replace('_', ' ')}"
          )
     if obj is None or not is_scoped(user, resource, action):
          return
     owner = obj.owning_property
     if owner is None or owner.manager_id != user.id:
          raise NotFoundError(NOT_FOUND_MESSAGES.get(resource, "Record not found"))


def managed_property_ids(db: Session, user: User) -> List[int]:
     rows = db.query(Property.id).filter(Property.manager_id == user.id).all()
     return [row[0] for row in rows]


# How each scoped resource reaches Property.id
_SCOPE_COLUMNS = {
     "property": Property.id,
     "floor": Floor.property_id,
     "local": Local.property_id,
}


def scope_query(db: Session, query: Query, user: User, resource: str, action: Action = Action.READ) -> Query:
     """
     Restrict a list query to the caller's managed properties when the
     grant is scoped. Queries over leases, payments and expenses must
     already be joined to Local (leases, payments) or be plain Expense
     queries.
     """
     if not is_scoped(user, resource, action):
          return query
     property_ids = managed_property_ids(db, user)
     if resource in _SCOPE_COLUMNS:
          return query.filter(_SCOPE_COLUMNS[resource].in_(property_ids))
     if resource in ("lease", "payment"):
          return query.filter(Local.property_id.in_(property_ids))
     if resource == "expense":
          local_ids = select(Local.id).where(Local.property_id.in_(property_ids))
          return query.filter(
               (Expense.property_id.in_(property_ids)) | (Expense.local_id.in_(local_ids))
          )
     return query
