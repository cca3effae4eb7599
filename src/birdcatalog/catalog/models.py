"""Catalog record models.

Records are decoded from the bundled JSON documents with pydantic and are
immutable once loaded. Wire field names follow the source documents
(``summaryHTML``, ``birdTitle``, ``responsiveUrls``...) through aliases.
"""

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from birdcatalog.config.models import ResponsiveUrlOrder


class Tag(StrEnum):
    """Status of a species within the region."""

    # (A) A species that rarely or accidentally occurs in the region
    ACCIDENTAL = "accidental"
    # (R?) A species which might be resident
    RESIDENCE_UNCERTAIN = "residenceUncertain"
    # (E) A species endemic to the region
    ENDEMIC = "endemic"
    # (E-R) A species found only in the region and a neighbouring one
    REGIONAL_ENDEMIC = "regionalEndemic"
    # (I) A species introduced as a consequence of human actions
    INTRODUCED = "introduced"

    @classmethod
    def from_display(cls, displayed: str) -> "Tag | None":
        """Derive a tag from the status suffix of a display string.

        Args:
            displayed: Display text such as "Resplendent Quetzal (E)"

        Returns:
            Matching tag, or None when the text carries no known suffix
        """
        text = displayed.rstrip()
        for suffix, tag in TAG_SUFFIXES.items():
            if text.endswith(suffix):
                return tag
        return None

    @property
    def label(self) -> str:
        """Human-readable label."""
        return TAG_LABELS[self]


TAG_SUFFIXES: dict[str, Tag] = {
    "(A)": Tag.ACCIDENTAL,
    "(R?)": Tag.RESIDENCE_UNCERTAIN,
    "(E)": Tag.ENDEMIC,
    "(E-R)": Tag.REGIONAL_ENDEMIC,
    "(I)": Tag.INTRODUCED,
}

TAG_LABELS: dict[Tag, str] = {
    Tag.ACCIDENTAL: "Accidental",
    Tag.RESIDENCE_UNCERTAIN: "Residence uncertain",
    Tag.ENDEMIC: "Endemic",
    Tag.REGIONAL_ENDEMIC: "Regional endemic",
    Tag.INTRODUCED: "Introduced",
}


class CatalogRecord(BaseModel):
    """Base for immutable records decoded from catalog JSON."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class TaxonLink(CatalogRecord):
    """Named taxonomic rank with its reference link."""

    name: str
    link: str = ""


class GroupFile(CatalogRecord):
    """Image file attached to a group."""

    filename: str
    title: str = ""


class Species(CatalogRecord):
    """One bird species within a group."""

    name: str
    link: str = ""
    latin: str
    tag: Tag | None = None

    @model_validator(mode="before")
    @classmethod
    def derive_tag(cls, data: Any) -> Any:  # noqa: ANN401
        """Derive the tag from the display string when it is not given explicitly."""
        if not isinstance(data, dict) or data.get("tag") is not None:
            return data
        displayed = data.get("displayedHTML")
        if isinstance(displayed, str):
            return {**data, "tag": Tag.from_display(displayed)}
        return data

    @property
    def title(self) -> str:
        """Normalized title used to join the species to its detail record."""
        return "_".join(self.name.split(" "))

    def __str__(self) -> str:
        """Return string representation for debugging."""
        return f"{self.name} ({self.latin})"


class Group(CatalogRecord):
    """A taxonomic grouping of species presented as one catalog entry."""

    category: str
    order: TaxonLink
    family: TaxonLink
    summary: str = ""
    summary_html: str = Field(default="", alias="summaryHTML")
    images: tuple[GroupFile, ...] = ()
    birds: tuple[Species, ...] = ()

    @property
    def image_filenames(self) -> list[str]:
        """Filenames of the group's own images in document order."""
        return [file.filename for file in self.images]


class SpeciesDetail(CatalogRecord):
    """Supplementary description of a species, keyed by its normalized title."""

    bird_title: str = Field(alias="birdTitle")
    summary: str = ""
    image_files: tuple[str, ...] = Field(default=(), alias="imageFiles")


class ResponsiveImage(CatalogRecord):
    """Displayable image with size/quality URL variants."""

    kind: Literal["image"] = "image"
    responsive_urls: dict[str, str]

    def display_url(self, order: ResponsiveUrlOrder = ResponsiveUrlOrder.DOCUMENT) -> str | None:
        """Pick the URL shown for this image.

        Args:
            order: DOCUMENT takes the first variant in source order,
                KEY the variant with the smallest descriptor

        Returns:
            Selected URL, or None when there are no variants
        """
        if not self.responsive_urls:
            return None
        if order == ResponsiveUrlOrder.KEY:
            return self.responsive_urls[min(self.responsive_urls)]
        return next(iter(self.responsive_urls.values()))


class VideoAsset(CatalogRecord):
    """Non-image media; never displayed as a picture."""

    kind: Literal["video"] = "video"
    duration: float


class UnresolvableAsset(CatalogRecord):
    """Media without responsive variants or duration."""

    kind: Literal["unresolvable"] = "unresolvable"


ImageAsset = Annotated[
    ResponsiveImage | VideoAsset | UnresolvableAsset, Field(discriminator="kind")
]


class ImageInfo(CatalogRecord):
    """Host-provided metadata for one media file."""

    width: int
    height: int
    mime: str
    size: int = 0
    timestamp: str = ""
    user: str = ""
    comment: str = ""
    thumburl: str = ""
    thumbwidth: int = 0
    thumbheight: int = 0
    url: str = ""
    descriptionurl: str = ""
    descriptionshorturl: str = ""
    asset: ImageAsset

    @model_validator(mode="before")
    @classmethod
    def decode_asset(cls, data: Any) -> Any:  # noqa: ANN401
        """Fold the optional responsiveUrls/duration fields into one asset variant."""
        if not isinstance(data, dict) or "asset" in data:
            return data
        data = dict(data)
        responsive_urls = data.pop("responsiveUrls", None)
        duration = data.pop("duration", None)
        if responsive_urls is not None:
            data["asset"] = {"kind": "image", "responsive_urls": responsive_urls}
        elif duration is not None:
            data["asset"] = {"kind": "video", "duration": duration}
        else:
            data["asset"] = {"kind": "unresolvable"}
        return data


class ImageMeta(CatalogRecord):
    """Metadata for one image file, joined to records by filename."""

    filename: str
    info: ImageInfo

    def display_url(self, order: ResponsiveUrlOrder = ResponsiveUrlOrder.DOCUMENT) -> str | None:
        """Return the displayable URL, or None for videos and unresolvable media."""
        if isinstance(self.info.asset, ResponsiveImage):
            return self.info.asset.display_url(order)
        return None
