"""
Unit tests for PropertyEndpoints.
"""

from urllib.parse import parse_qs, urlparse

import pytest

from conftest import TEST_BASE_URL, make_response
from hospitable.api.response_handler import NotFoundError
from hospitable.core.error_handler import ValidationError
from tests.fixtures.sample_data import BERLIN_PROPERTY, PROPERTY_IDS, SAMPLE_PROPERTIES, page_envelope


class TestPropertyEndpoints:
    """Test suite for property listing and lookup"""

    @pytest.mark.unit
    def test_get_properties_returns_envelope_unmodified(self, property_endpoints, mock_session, sent_request):
        envelope = page_envelope(SAMPLE_PROPERTIES, page=1, total=3, per_page=10)
        mock_session.request.return_value = make_response(200, envelope)

        result = property_endpoints.get_properties(include="user,listings", page=1, per_page=10)

        _, url, _ = sent_request()
        parsed = urlparse(url)
        assert result == envelope
        assert parsed.path == "/v2/properties"
        assert parse_qs(parsed.query) == {"include": ["user,listings"], "page": ["1"], "per_page": ["10"]}

    @pytest.mark.unit
    def test_get_properties_without_options(self, property_endpoints, sent_request):
        property_endpoints.get_properties()

        _, url, _ = sent_request()
        assert url == f"{TEST_BASE_URL}/properties"

    @pytest.mark.unit
    def test_invalid_include_never_sent(self, property_endpoints, mock_session):
        with pytest.raises(ValidationError) as exc_info:
            property_endpoints.get_properties(include="user,financials")

        assert exc_info.value.kind == "invalid_includes"
        assert exc_info.value.invalid == ["financials"]
        mock_session.request.assert_not_called()

    @pytest.mark.unit
    def test_get_property(self, property_endpoints, mock_session, sent_request):
        mock_session.request.return_value = make_response(200, {"data": BERLIN_PROPERTY})

        result = property_endpoints.get_property(PROPERTY_IDS["berlin"], include="details")

        _, url, _ = sent_request()
        assert result["data"]["id"] == PROPERTY_IDS["berlin"]
        assert url == f"{TEST_BASE_URL}/properties/{PROPERTY_IDS['berlin']}?include=details"

    @pytest.mark.unit
    def test_get_property_rejects_bad_uuid_without_request(self, property_endpoints, mock_session):
        with pytest.raises(ValidationError) as exc_info:
            property_endpoints.get_property("123")

        assert exc_info.value.kind == "invalid_uuid"
        mock_session.request.assert_not_called()

    @pytest.mark.unit
    def test_get_property_not_found(self, property_endpoints, mock_session):
        mock_session.request.return_value = make_response(404, {"message": "Not found"})

        with pytest.raises(NotFoundError):
            property_endpoints.get_property(PROPERTY_IDS["munich"])
