"""Tests for Beeswax error classification."""

import pytest

from beeswax_client.errors import BeeswaxAPIError, BeeswaxAuthenticationError, is_not_found_error


def error_with(body):
    return BeeswaxAPIError("failed", status_code=406, response_body=body)


class TestIsNotFoundError:
    """Tests for is_not_found_error()."""

    @pytest.mark.parametrize(
        "message",
        [
            ["Could not load object 12 to update, check that it exists"],
            ["first problem", "Could not load object 12 to update"],
            "Could not load object 12 to update",
        ],
    )
    def test_matches_payload_messages(self, message):
        error = error_with({"success": False, "payload": [{"message": message}]})

        assert is_not_found_error(error, "update")

    def test_matches_error_detail_message(self):
        error = error_with({"success": False, "error": {"message": "Could not load object 3 to delete"}})

        assert is_not_found_error(error, "delete")

    def test_match_is_case_sensitive(self):
        error = error_with({"success": False, "payload": [{"message": ["could not load object 12 to update"]}]})

        assert not is_not_found_error(error, "update")

    def test_action_must_match(self):
        error = error_with({"success": False, "payload": [{"message": ["Could not load object 3 to delete"]}]})

        assert not is_not_found_error(error, "update")

    @pytest.mark.parametrize(
        "body",
        [
            None,
            "Could not load object 3 to update",
            {"success": False},
            {"success": False, "payload": []},
            {"success": False, "payload": ["Could not load object 3 to update"]},
            {"success": False, "payload": [{"message": ["line_item_budget is required"]}]},
            {"success": False, "payload": [{"message": [None, 7]}]},
        ],
    )
    def test_other_bodies_do_not_match(self, body):
        assert not is_not_found_error(error_with(body), "update")


def test_authentication_error_is_api_error():
    error = BeeswaxAuthenticationError("bad creds", status_code=200, response_body={"success": False})

    assert isinstance(error, BeeswaxAPIError)
    assert error.status_code == 200
    assert error.response_body == {"success": False}
