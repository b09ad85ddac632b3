"""Tests for the artwork payload models."""

import json

import pytest
from pydantic import ValidationError

from acres.api import ArtworkInfo, ArtworksListing, artwork_infos
from acres.iiif import Uri

from conftest import IIIF_BASE, IMAGE_ID, load_fixture


@pytest.fixture
def artwork_payload() -> dict:
    return json.loads(load_fixture("artwork_27992.json"))


@pytest.fixture
def listing_payload() -> dict:
    return json.loads(load_fixture("artworks_page.json"))


class TestArtworkInfo:
    """Tests for ArtworkInfo."""

    def test_from_payload(self, artwork_payload):
        """Test the image fields are picked out of a full payload."""
        info = ArtworkInfo.model_validate(artwork_payload)
        assert info.data.id == 27992
        assert info.data.image_id == IMAGE_ID
        assert str(info) == "A Sunday on La Grande Jatte - 1884 (27992)"

    def test_to_uri(self, artwork_payload):
        """Test the IIIF base URI joins server and image id."""
        uri = ArtworkInfo.model_validate(artwork_payload).to_uri()
        assert uri == Uri.parse(f"{IIIF_BASE}/{IMAGE_ID}")
        assert uri.prefix == "/iiif/2"

    def test_trailing_slash_on_iiif_url(self, artwork_payload):
        """Test a trailing slash on iiif_url does not double up."""
        artwork_payload["config"]["iiif_url"] = IIIF_BASE + "/"
        uri = ArtworkInfo.model_validate(artwork_payload).to_uri()
        assert str(uri) == f"{IIIF_BASE}/{IMAGE_ID}"

    def test_missing_title_defaults(self, artwork_payload):
        """Test artworks without a title are labelled Untitled."""
        del artwork_payload["data"]["title"]
        assert ArtworkInfo.model_validate(artwork_payload).data.title == "Untitled"

    def test_missing_image_id(self, artwork_payload):
        """Test artworks without an image are rejected."""
        artwork_payload["data"]["image_id"] = None
        with pytest.raises(ValidationError):
            ArtworkInfo.model_validate(artwork_payload)


class TestArtworksListing:
    """Tests for ArtworksListing."""

    def test_pagination(self, listing_payload):
        """Test the pagination block is parsed."""
        listing = ArtworksListing.model_validate(listing_payload)
        assert listing.pagination.total == 128194
        assert listing.pagination.current_page == 1

    def test_artwork_infos_skip_imageless(self, listing_payload):
        """Test entries without image_id are skipped, order preserved."""
        infos = artwork_infos(listing_payload)
        assert [info.data.id for info in infos] == [1, 3]
        assert str(infos[1].to_uri()) == f"{IIIF_BASE}/33333333-3333-3333-3333-333333333333"
