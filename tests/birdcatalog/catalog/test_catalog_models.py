"""Tests for catalog record models."""

import pytest
from pydantic import ValidationError

from birdcatalog.catalog.models import (
    Group,
    ImageMeta,
    ResponsiveImage,
    Species,
    SpeciesDetail,
    Tag,
    UnresolvableAsset,
    VideoAsset,
)
from birdcatalog.config.models import ResponsiveUrlOrder


class TestTag:
    """Should derive species status tags from display suffixes."""

    @pytest.mark.parametrize(
        "displayed,expected",
        [
            ("Resplendent Quetzal (E)", Tag.ENDEMIC),
            ("Some Bird (R?)", Tag.RESIDENCE_UNCERTAIN),
            ("Vagrant Gull (A)", Tag.ACCIDENTAL),
            ("Baird's Trogon (E-R)", Tag.REGIONAL_ENDEMIC),
            ("Rock Pigeon (I) ", Tag.INTRODUCED),
            ("Plain Bird", None),
            ("Bird (X)", None),
            ("", None),
        ],
    )
    def test_from_display(self, displayed, expected):
        """Should map known suffixes to tags and anything else to None."""
        assert Tag.from_display(displayed) is expected

    def test_wire_values(self):
        """Should keep the wire values used by the catalog documents."""
        assert Tag("residenceUncertain") is Tag.RESIDENCE_UNCERTAIN
        assert Tag("regionalEndemic") is Tag.REGIONAL_ENDEMIC

    def test_label(self):
        """Should provide a human-readable label."""
        assert Tag.RESIDENCE_UNCERTAIN.label == "Residence uncertain"
        assert Tag.ENDEMIC.label == "Endemic"


class TestSpecies:
    """Should decode species records."""

    def test_title_replaces_spaces(self):
        """Should build the join title by replacing spaces with underscores."""
        species = Species(name="Resplendent Quetzal", latin="Pharomachrus mocinno")

        assert species.title == "Resplendent_Quetzal"

    def test_title_keeps_repeated_spaces(self):
        """Should replace every space, including repeated ones."""
        species = Species(name="Odd  Name", latin="Odd name")

        assert species.title == "Odd__Name"

    def test_tag_from_displayed_html(self):
        """Should derive the tag from displayedHTML when no tag is given."""
        species = Species.model_validate(
            {
                "name": "Coppery-headed Emerald",
                "latin": "Microchera cupreiceps",
                "displayedHTML": "Coppery-headed Emerald (E)",
            }
        )

        assert species.tag is Tag.ENDEMIC

    def test_explicit_tag_wins(self):
        """Should keep an explicit tag over the display suffix."""
        species = Species.model_validate(
            {"name": "Bird", "latin": "Avis", "tag": "introduced", "displayedHTML": "Bird (E)"}
        )

        assert species.tag is Tag.INTRODUCED

    def test_no_tag(self):
        """Should leave the tag empty without a suffix."""
        species = Species.model_validate(
            {"name": "Plain Bird", "latin": "Avis", "displayedHTML": "Plain Bird"}
        )

        assert species.tag is None

    def test_immutable(self):
        """Should reject mutation after load."""
        species = Species(name="Bird", latin="Avis")

        with pytest.raises(ValidationError):
            species.name = "Other"


class TestGroup:
    """Should decode group records."""

    def test_aliases_and_filenames(self):
        """Should read summaryHTML and expose image filenames in order."""
        group = Group.model_validate(
            {
                "category": "Trogons",
                "order": {"name": "Trogoniformes", "link": ""},
                "family": {"name": "Trogonidae", "link": ""},
                "summary": "plain",
                "summaryHTML": "<p>rich</p>",
                "images": [{"filename": "b.jpg", "title": ""}, {"filename": "a.jpg"}],
                "birds": [{"name": "Collared Trogon", "latin": "Trogon collaris"}],
            }
        )

        assert group.summary_html == "<p>rich</p>"
        assert group.image_filenames == ["b.jpg", "a.jpg"]
        assert group.birds[0].name == "Collared Trogon"

    def test_requires_order(self):
        """Should reject a group without an order."""
        with pytest.raises(ValidationError):
            Group.model_validate({"category": "X", "family": {"name": "Y"}})


class TestSpeciesDetail:
    """Should decode species detail records."""

    def test_aliases(self):
        """Should read birdTitle and imageFiles, keeping duplicates."""
        detail = SpeciesDetail.model_validate(
            {"birdTitle": "Bird", "summary": "s", "imageFiles": ["a.jpg", "a.jpg"]}
        )

        assert detail.bird_title == "Bird"
        assert detail.image_files == ("a.jpg", "a.jpg")


class TestImageMeta:
    """Should decode image metadata into a tagged asset variant."""

    def test_responsive_image(self, image_meta_factory):
        """Should decode responsiveUrls into a displayable image."""
        meta = ImageMeta.model_validate(
            image_meta_factory("a.jpg", {"2": "https://x/440.jpg", "1.5": "https://x/330.jpg"})
        )

        assert isinstance(meta.info.asset, ResponsiveImage)
        assert meta.display_url() == "https://x/440.jpg"

    def test_display_url_by_key(self, image_meta_factory):
        """Should pick the smallest descriptor key when ordering by key."""
        meta = ImageMeta.model_validate(
            image_meta_factory("a.jpg", {"2": "https://x/440.jpg", "1.5": "https://x/330.jpg"})
        )

        assert meta.display_url(ResponsiveUrlOrder.KEY) == "https://x/330.jpg"

    def test_video(self, image_meta_factory):
        """Should decode duration into a video asset without a display URL."""
        meta = ImageMeta.model_validate(image_meta_factory("call.webm", duration=3.5))

        assert meta.info.asset == VideoAsset(duration=3.5)
        assert meta.display_url() is None

    def test_unresolvable(self, image_meta_factory):
        """Should decode records with neither field as unresolvable."""
        meta = ImageMeta.model_validate(image_meta_factory("raw.jpg"))

        assert isinstance(meta.info.asset, UnresolvableAsset)
        assert meta.display_url() is None

    def test_empty_responsive_urls(self, image_meta_factory):
        """Should treat an empty responsive mapping as having no display URL."""
        meta = ImageMeta.model_validate(image_meta_factory("a.jpg", {}))

        assert meta.display_url() is None

    def test_provenance_kept(self, image_meta_factory):
        """Should keep provenance fields."""
        meta = ImageMeta.model_validate(image_meta_factory("a.jpg"))

        assert meta.info.user == "tester"
        assert meta.info.descriptionurl == "https://img.example/wiki/a.jpg"

    def test_requires_dimensions(self):
        """Should reject image info without dimensions."""
        with pytest.raises(ValidationError):
            ImageMeta.model_validate({"filename": "a.jpg", "info": {"mime": "image/jpeg"}})
