"""Tests for activity normalization into engine input."""

import json

from relay.dialogue.normalizer import build_engine_input, read_client_info, split_name


class TestSplitName:
    """Tests for split_name()."""

    def test_two_part_name(self):
        # last_name is the given name plus the separating space
        assert split_name("John Smith") == ("John", "John ")

    def test_three_part_name(self):
        assert split_name("Mary Ann Jones") == ("Mary", "Mary ")

    def test_single_name(self):
        assert split_name("Madonna") == ("Madonna", "Madonna")

    def test_empty_name(self):
        assert split_name("") == ("", "")

    def test_leading_space(self):
        assert split_name(" Smith") == ("", " ")


class TestBuildEngineInput:
    """Tests for build_engine_input()."""

    def test_maps_activity_fields(self, make_activity):
        activity = make_activity(text="Hi there", channel_id="msteams")

        engine_input = build_engine_input(activity, "sheet-1")

        assert engine_input.text == "Hi there"
        assert engine_input.channel == "botframework-msteams"
        assert engine_input.sheet_id == "sheet-1"
        assert engine_input.display_name == "John Smith"
        assert engine_input.given_name == "John"
        assert engine_input.last_name == "John "
        assert engine_input.country_code == "US"
        assert engine_input.locale == "en-US"
        assert engine_input.attachments_json is None

    def test_missing_text_becomes_empty(self, make_activity):
        engine_input = build_engine_input(make_activity(text=None), None)
        assert engine_input.text == ""

    def test_missing_sender_name(self, make_activity):
        engine_input = build_engine_input(make_activity(from_name=None), None)
        assert engine_input.display_name == ""
        assert engine_input.given_name == ""

    def test_uses_first_entity_only(self, make_activity):
        activity = make_activity(
            entities=[
                {"type": "clientInfo", "locale": "sv-SE", "country": "SE"},
                {"type": "clientInfo", "locale": "en-US", "country": "US"},
            ]
        )
        engine_input = build_engine_input(activity, None)
        assert engine_input.country_code == "SE"
        assert engine_input.locale == "sv-SE"

    def test_missing_entities_leave_country_and_locale_unset(self, make_activity):
        activity = make_activity(with_entities=False)

        info = read_client_info(activity)
        engine_input = build_engine_input(activity, None)

        assert info.country is None and info.locale is None
        assert "countryCode" not in engine_input.to_params()
        assert "locale" not in engine_input.to_params()

    def test_attachments_serialized_compactly(self, make_activity):
        attachments = [{"contentType": "image/png", "contentUrl": "https://x/y.png"}]
        engine_input = build_engine_input(make_activity(attachments=attachments), None)

        assert engine_input.attachments_json == (
            '[{"contentType":"image/png","contentUrl":"https://x/y.png"}]'
        )
        assert json.loads(engine_input.attachments_json) == attachments

    def test_empty_attachment_list_is_still_sent(self, make_activity):
        engine_input = build_engine_input(make_activity(attachments=[]), None)
        assert engine_input.attachments_json == "[]"

    def test_params_use_engine_names(self, make_activity):
        params = build_engine_input(make_activity(), "sheet-1").to_params()
        assert params == {
            "channel": "botframework-msteams",
            "sheetId": "sheet-1",
            "displayName": "John Smith",
            "lastName": "John ",
            "givenName": "John",
            "name": "John",
            "countryCode": "US",
            "locale": "en-US",
        }
