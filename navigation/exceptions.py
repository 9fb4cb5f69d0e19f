# backend/navigation/exceptions.py
"""
Errors raised by the navigation stores and services.

They are DRF exceptions so views can let them propagate and the default
exception handler renders the right status code.
"""
from rest_framework import status
from rest_framework.exceptions import APIException, PermissionDenied
from rest_framework.exceptions import NotFound as _DRFNotFound


def _join_ids(ids) -> str:
    return ", ".join(str(i) for i in ids)


class NotFound(_DRFNotFound):
    default_detail = "Navigation entity not found."


class DanglingReference(APIException):
    """A structure update names navigation items that do not exist."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "dangling_reference"

    def __init__(self, missing_ids):
        self.missing_ids = sorted(missing_ids)
        super().__init__(
            f"Navigation items do not exist: {_join_ids(self.missing_ids)}."
        )


class ReferencedByTree(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_code = "referenced_by_tree"

    def __init__(self, navigation_item_id, tree_ids):
        self.navigation_item_id = navigation_item_id
        self.tree_ids = sorted(tree_ids)
        super().__init__(
            f"Navigation item {navigation_item_id} is still used by "
            f"navigation trees: {_join_ids(self.tree_ids)}."
        )


class InvalidStructure(APIException):
    """Malformed or cyclic navigation tree forest."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "invalid_structure"
    default_detail = "Invalid navigation tree structure."


class InconsistentState(APIException):
    """
    Stored structure references an item that no longer exists.

    This is never a user error: it means a stored invariant was broken.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = "inconsistent_state"

    def __init__(self, missing_ids, tree_id=None):
        self.missing_ids = sorted(missing_ids)
        self.tree_id = tree_id
        super().__init__(
            f"Navigation tree {tree_id} references missing navigation items: "
            f"{_join_ids(self.missing_ids)}."
        )


# Cross-shop access is rejected by shops.permissions.HasShopRole
Forbidden = PermissionDenied
