"""Map curated and generative breed records onto one display schema."""

from __future__ import annotations

from urllib.parse import quote

from petwiki.data.schemas import (
    BreedSummary,
    BreedSummaryRecord,
    Pet,
    PetImage,
    PetType,
)

UNKNOWN_TYPE = "unknown"
_TYPE_SLUGS = (PetType.DOG.value, PetType.CAT.value)


def pet_type(pet: Pet) -> str:
    """Return ``dog``, ``cat`` or ``unknown`` from the pet's groups.

    Dog is checked before cat, whatever order the groups come in.
    """
    slugs = {group.slug for group in pet.groups}
    for candidate in _TYPE_SLUGS:
        if candidate in slugs:
            return candidate
    return UNKNOWN_TYPE


def pet_category(pet: Pet) -> str:
    """Name of the first group that is not the dog/cat group."""
    for group in pet.groups:
        if group.slug not in _TYPE_SLUGS and group.name:
            return group.name
    return "Unknown"


def _category_or_empty(pet: Pet) -> str:
    category = pet_category(pet)
    return "" if category == "Unknown" else category


def _first_non_blank(*candidates: str) -> str:
    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate.strip()
    return ""


def map_pet(pet: Pet) -> BreedSummaryRecord:
    """Convert a curated API pet into a BreedSummaryRecord.

    Args:
        pet: Pet as returned by the REST API.

    Returns:
        Display record. ``image_url`` is empty when the pet has no featured
        image; callers substitute :func:`placeholder_image_url`.
    """
    image_url = ""
    if pet.featured_image is not None:
        image_url = pet.featured_image.medium or pet.featured_image.url

    return BreedSummaryRecord(
        id=pet.id,
        name=pet.name,
        type=pet_type(pet),
        short_description=_first_non_blank(
            pet.excerpt, pet.description, _category_or_empty(pet)
        ),
        size_label=" | ".join(part for part in (pet.height, pet.weight) if part.strip()),
        image_url=image_url,
        slug=pet.slug,
    )


def synthesize_slug(name: str, breed_type: str) -> str:
    """Derive a stable detail-page key for a record that has no slug.

    The same name and type always produce the same slug.
    """
    return f"{breed_type.strip().lower()}/{quote(name.strip(), safe='')}"


def map_breed_summary(breed: BreedSummary) -> BreedSummaryRecord:
    """Convert a generative BreedSummary into a BreedSummaryRecord."""
    return BreedSummaryRecord(
        id=None,
        name=breed.name,
        type=breed.type.value,
        short_description=breed.short_description,
        size_label=breed.size,
        image_url="",
        slug=synthesize_slug(breed.name, breed.type.value),
    )


def map_records(raw: list[Pet | BreedSummary]) -> list[BreedSummaryRecord]:
    """Map a mixed list of upstream records, one mapper per shape."""
    records = []
    for item in raw:
        if isinstance(item, Pet):
            records.append(map_pet(item))
        else:
            records.append(map_breed_summary(item))
    return records


def placeholder_image_url(
    name: str, breed_type: str, width: int = 400, height: int = 300
) -> str:
    """Deterministic stock image URL keyed by breed name and type."""
    seed = name if breed_type == PetType.DOG.value else f"{name}{breed_type}"
    return f"https://picsum.photos/seed/{quote(seed, safe='')}/{width}/{height}"


def parse_story(story: str) -> tuple[str, str]:
    """Extract the ``English name:`` and ``More info:`` lines of a story.

    Returns:
        Tuple of (english name, more info URL); missing values are empty.
    """
    english_name = ""
    more_info = ""
    for line in story.splitlines():
        if line.startswith("English name:") and not english_name:
            english_name = line.removeprefix("English name:").strip()
        elif line.startswith("More info:") and not more_info:
            more_info = line.removeprefix("More info:").strip()
    return english_name, more_info


def gallery_images(pet: Pet) -> list[PetImage]:
    """Up to three images for the detail thumbnails."""
    if pet.gallery:
        return pet.gallery[:3]
    if pet.featured_image is not None:
        return [pet.featured_image] * 3
    return []
