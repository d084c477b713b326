# storefront/domain/landing.py
"""
Landing page document.

The document is stored as one JSON blob under the key "default". Blobs written
before the schema was versioned carry no "version" key and count as version 0.
Reading runs every registered migration up to LANDING_SCHEMA_VERSION and then
validates; saving validates the full document and always writes the current
version.
"""
import copy
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from storefront.domain.landing_defaults import DEFAULT_LANDING_CONTENT

LANDING_SCHEMA_VERSION = 1


class _Doc(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value


class IntroSection(_Doc):
    badge: Optional[str] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None
    cta_enter: Optional[str] = None
    cta_whatsapp: Optional[str] = None


class NavSection(_Doc):
    brand_title: Optional[str] = None
    brand_subtitle: Optional[str] = None
    login_label: Optional[str] = None
    logged_in_label: Optional[str] = None
    logout_label: Optional[str] = None
    loja_label: Optional[str] = None
    etapas_label: Optional[str] = None
    whatsapp_label: Optional[str] = None


class HeroSection(_Doc):
    badge: Optional[str] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None
    cta_specialist: Optional[str] = None
    cta_catalog: Optional[str] = None
    image_alt: Optional[str] = None
    image_caption: Optional[str] = None


class HeadingSection(_Doc):
    badge: Optional[str] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None


class ProcessoSection(_Doc):
    badge: Optional[str] = None
    title: Optional[str] = None
    help_cta: Optional[str] = None


class VitrineSection(HeadingSection):
    cta_catalog: Optional[str] = None
    empty_fallback: Optional[str] = None


class FeedbacksSection(HeadingSection):
    prev: Optional[str] = None
    next: Optional[str] = None
    proof_label: Optional[str] = None


class FaqSection(HeadingSection):
    cta_whatsapp: Optional[str] = None


class CtaFinalSection(HeadingSection):
    cta_whatsapp: Optional[str] = None
    cta_catalog: Optional[str] = None
    image_alt: Optional[str] = None
    image_caption: Optional[str] = None


class TitledEntry(_Doc):
    title: Optional[str] = None
    description: Optional[str] = None


class Guarantee(TitledEntry):
    icon: Optional[str] = None


class FaqEntry(_Doc):
    question: Optional[str] = None
    answer: Optional[str] = None


class LandingContent(_Doc):
    version: int = LANDING_SCHEMA_VERSION
    whatsapp_link: Optional[str] = None

    intro: IntroSection
    nav: NavSection
    hero: HeroSection
    diferencial: HeadingSection
    processo: ProcessoSection
    vitrine: VitrineSection
    seguranca: HeadingSection
    feedbacks: FeedbacksSection
    faq: FaqSection
    cta_final: CtaFinalSection

    highlights: List[TitledEntry] = []
    steps: List[TitledEntry] = []
    guarantees: List[Guarantee] = []
    faqs: List[FaqEntry] = []

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


def _known_keys_only(doc: Dict[str, Any], template: Dict[str, Any]) -> Dict[str, Any]:
    out = {}
    for key, value in doc.items():
        if key not in template:
            continue
        if isinstance(template[key], dict) and isinstance(value, dict):
            out[key] = _known_keys_only(value, template[key])
        else:
            out[key] = value
    return out


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _migrate_0_to_1(doc: Dict[str, Any]) -> Dict[str, Any]:
    # unversioned blobs may be partial and may carry stale keys
    migrated = _merge(DEFAULT_LANDING_CONTENT, _known_keys_only(doc, DEFAULT_LANDING_CONTENT))
    migrated["version"] = 1
    return migrated


MIGRATIONS: Dict[int, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    0: _migrate_0_to_1,
}


def migrate(doc: Dict[str, Any]) -> Dict[str, Any]:
    version = doc.get("version", 0)
    if not isinstance(version, int) or isinstance(version, bool):
        raise ValueError("landing content version must be an integer")
    if version > LANDING_SCHEMA_VERSION:
        raise ValueError(f"landing content version {version} is newer than {LANDING_SCHEMA_VERSION}")

    while version < LANDING_SCHEMA_VERSION:
        doc = MIGRATIONS[version](doc)
        version = doc["version"]
    return doc


def parse_landing_content(raw: Any) -> LandingContent:
    """Migrate and validate. Raises ValueError (or ValidationError) when malformed."""
    if not isinstance(raw, dict):
        raise ValueError("landing content must be a JSON object")
    return LandingContent.model_validate(migrate(dict(raw)))


def default_landing_content() -> LandingContent:
    return parse_landing_content(DEFAULT_LANDING_CONTENT)


