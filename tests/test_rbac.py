import pytest

from granitedb.rbac import Action, AuthorizationDenied, RbacManager


def allowed(manager, roles, action):
    try:
        manager.authorize(roles, action)
    except AuthorizationDenied:
        return False
    return True


@pytest.fixture
def manager():
    return RbacManager()


def test_default_roles_present(manager):
    names = {role.name for role in manager.list_roles()}
    assert names == {"read", "readWrite", "dbAdmin", "userAdmin", "root"}


def test_root_allows_everything(manager):
    assert set(manager.get_role("root").actions) == set(Action)
    permitted = {action for action in Action if allowed(manager, ["root"], action)}
    assert permitted == set(Action)


def test_read_role_only_reads(manager):
    permitted = {action for action in Action if allowed(manager, ["read"], action)}
    assert permitted == {Action.READ}


def test_read_write_role(manager):
    permitted = {action for action in Action if allowed(manager, ["readWrite"], action)}
    assert permitted == {Action.READ, Action.WRITE, Action.DELETE}


def test_user_admin_cannot_read(manager):
    assert allowed(manager, ["userAdmin"], Action.GRANT_ROLE) is True
    assert allowed(manager, ["userAdmin"], Action.READ) is False


def test_db_admin_lacks_admin_ops(manager):
    assert allowed(manager, ["dbAdmin"], Action.DROP_INDEX) is True
    assert allowed(manager, ["dbAdmin"], Action.ADMIN_OPS) is False


def test_roles_combine(manager):
    assert allowed(manager, ["read", "userAdmin"], Action.CREATE_USER) is True


def test_denied_carries_action(manager):
    with pytest.raises(AuthorizationDenied) as info:
        manager.authorize(["read"], Action.WRITE)
    assert info.value.action == "Write"
    assert info.value.user == "unknown"


def test_unknown_role_denied(manager):
    with pytest.raises(AuthorizationDenied):
        manager.authorize(["nobody"], Action.READ)


def test_no_roles_denied(manager):
    with pytest.raises(AuthorizationDenied):
        manager.authorize([], Action.READ)


def test_create_custom_role(manager):
    manager.create_role("indexer", [Action.CREATE_INDEX], "Builds indexes")
    role = manager.get_role("indexer")
    assert role.actions == [Action.CREATE_INDEX]
    assert role.description == "Builds indexes"
    assert allowed(manager, ["indexer"], Action.CREATE_INDEX) is True
    assert allowed(manager, ["indexer"], Action.READ) is False


def test_create_role_replaces(manager):
    manager.create_role("read", [Action.WRITE], "changed")
    assert allowed(manager, ["read"], Action.READ) is False
    assert len(manager.list_roles()) == 5


def test_get_missing_role(manager):
    assert manager.get_role("missing") is None