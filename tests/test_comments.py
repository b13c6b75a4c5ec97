"""Tests for fb.integrations.comments module."""

import re

from fb.integrations.comments import build_comment_payload, generate_comment_id

URL_SAFE = re.compile(r"^[A-Za-z0-9_-]+$")


class TestGenerateCommentId:
    """Tests for generate_comment_id()."""

    def test_length_and_alphabet(self):
        comment_id = generate_comment_id()

        assert len(comment_id) == 18
        assert URL_SAFE.match(comment_id)
        assert "=" not in comment_id

    def test_ids_are_random(self):
        ids = {generate_comment_id() for _ in range(50)}

        assert len(ids) == 50


class TestBuildCommentPayload:
    """Tests for build_comment_payload()."""

    def test_generates_id(self):
        payload = build_comment_payload("t1", "Started")

        assert payload.ticket_id == "t1"
        assert payload.comment == "Started"
        assert len(payload.id) == 18

    def test_wire_format(self):
        payload = build_comment_payload("t1", "Done", comment_id="fixed-id")

        assert payload.to_api() == {"_id": "fixed-id", "ticket_id": "t1", "comment": "Done"}
