from __future__ import annotations

import pytest

from praetor.access.visibility import AssignedTo, SelfOrRoles, Unrestricted, VisibilityResolver, require_visible
from praetor.core.enums import ResourceType, Role
from praetor.core.exceptions import AuthorizationError, NotFoundError


@pytest.fixture
def resolver():
    return VisibilityResolver()


@pytest.mark.parametrize("resource", [ResourceType.CLIENTS, ResourceType.PROJECTS, ResourceType.TASKS])
def test_admin_and_manager_see_all_catalog_rows(resolver, resource):
    assert resolver.resolve(role=Role.ADMIN, owner_id="a", resource=resource) == Unrestricted()
    assert resolver.resolve(role=Role.MANAGER, owner_id="m", resource=resource) == Unrestricted()


def test_user_sees_clients_through_own_assignment_rows(resolver):
    scope = resolver.resolve(role=Role.USER, owner_id="u-1", resource=ResourceType.CLIENTS)

    assert isinstance(scope, AssignedTo)
    where, params = scope.to_sql("c")
    assert where == "c.id IN (SELECT client_id FROM user_clients WHERE user_id=%s)"
    assert params == ("u-1",)


def test_manager_sees_only_managed_work_units(resolver):
    where, params = resolver.resolve(role=Role.MANAGER, owner_id="m-1", resource=ResourceType.WORK_UNITS).to_sql("w")

    assert where == "w.id IN (SELECT work_unit_id FROM work_unit_managers WHERE user_id=%s)"
    assert params == ("m-1",)


def test_plain_user_cannot_list_work_units(resolver):
    with pytest.raises(AuthorizationError):
        resolver.resolve(role=Role.USER, owner_id="u-1", resource=ResourceType.WORK_UNITS)


def test_user_collection_scopes(resolver):
    manager = resolver.resolve(role=Role.MANAGER, owner_id="m-1", resource=ResourceType.USERS)
    user = resolver.resolve(role=Role.USER, owner_id="u-1", resource=ResourceType.USERS)

    assert manager == SelfOrRoles("m-1", (Role.USER,))
    assert manager.to_sql("u") == ("(u.id=%s OR u.role IN (%s))", ("m-1", "user"))
    assert user.to_sql("u") == ("u.id=%s", ("u-1",))


def test_require_visible_distinguishes_missing_from_forbidden():
    with pytest.raises(NotFoundError, match="Client not found"):
        require_visible(None, None, "Client")
    with pytest.raises(AuthorizationError):
        require_visible(object(), None, "Client")
    row = object()
    assert require_visible(row, row, "Client") is row
