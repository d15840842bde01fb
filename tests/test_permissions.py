import pytest

from store_rating.auth.permissions import CAPABILITIES, Operation, Role, authorize, is_allowed
from store_rating.auth.utils import Identity
from store_rating.core.errors import Forbidden, Unauthorized


def identity(role):
    return Identity(subject_id="id-1", email="someone@example.com", role=role)


def test_every_operation_has_an_entry():
    assert set(CAPABILITIES) == set(Operation)


def test_missing_identity_is_unauthorized():
    with pytest.raises(Unauthorized):
        authorize(None, Operation.VIEW_PROFILE)


def test_normal_user_on_admin_operation_is_forbidden():
    with pytest.raises(Forbidden):
        authorize(identity(Role.NORMAL_USER), Operation.LIST_USERS)


def test_admin_cannot_submit_rating():
    with pytest.raises(Forbidden):
        authorize(identity(Role.SYSTEM_ADMIN), Operation.SUBMIT_RATING)


def test_owner_cannot_create_store():
    assert not is_allowed(Role.STORE_OWNER, Operation.CREATE_STORE)


@pytest.mark.parametrize(
    "role, operation",
    [
        (Role.NORMAL_USER, Operation.SUBMIT_RATING),
        (Role.STORE_OWNER, Operation.VIEW_STORE_RATINGS),
        (Role.SYSTEM_ADMIN, Operation.VIEW_DASHBOARD),
        (Role.STORE_OWNER, Operation.UPDATE_PROFILE),
    ],
)
def test_allowed_operations_return_identity(role, operation):
    who = identity(role)
    assert authorize(who, operation) is who
