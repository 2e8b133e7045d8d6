"""Folder name parser service implementation."""

import re
from typing import Callable, List, Optional, Sequence

from pydantic import BaseModel, Field

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils.name_tokens import (
    collapse_whitespace,
    extract_candidate_names,
    find_bracket_groups,
    is_date_token,
    is_identity_token,
    remove_name_occurrences,
    strip_bracket_groups,
    strip_leading_date,
    strip_leading_serial,
    strip_separators,
)
from ..interfaces import IFolderNameParser
from ..models import FieldConfidence, ParsedCandidate, ParseMethod
from .confidence import ConfidenceClassifier

_EXACT_RE = re.compile(r"^\[([^\]]*)\]\[([^\]]*)\](.*)$")

FORMAT_ERROR = "Folder name must follow the format [Studio][Model]Title"
EMPTY_STUDIO_ERROR = "Studio name must not be empty"


class FieldGuess(BaseModel):
    """A value proposed for one identity field."""

    value: str
    confidence: int = Field(ge=0, le=100)


class StrategyPatch(BaseModel):
    """Fields proposed by one strategy; only still-empty fields are applied."""

    method: ParseMethod
    studio: Optional[FieldGuess] = None
    model: Optional[FieldGuess] = None


Strategy = Callable[[str, ParsedCandidate], Optional[StrategyPatch]]


def _clean_part(text: str) -> str:
    return strip_separators(collapse_whitespace(strip_bracket_groups(text)))


class FolderNameParser(IFolderNameParser, LoggerMixin):
    """Infers studio and model from folder names.

    The strict ``[Studio][Model]Title`` form is tried first. Anything else
    goes through an ordered chain of heuristic strategies; each strategy
    looks at the name and the partially filled candidate and may propose
    values. A field keeps the first value proposed for it, so earlier
    strategies always win over later ones.
    """

    def __init__(self, config: Config, strategies: Optional[Sequence[Strategy]] = None):
        """Initialize parser.

        Args:
            config: Application configuration.
            strategies: Heuristic strategies in priority order. Defaults to
                bracket harvesting, ``@`` separator, `` - `` separator and
                residual text extraction.
        """
        self._settings = config.parsing
        self._classifier = ConfidenceClassifier(config)
        if strategies is None:
            strategies = [
                self.bracket_strategy,
                self.at_separator_strategy,
                self.hyphen_separator_strategy,
                self.text_extraction_strategy,
            ]
        self._strategies: List[Strategy] = list(strategies)

    @property
    def classifier(self) -> ConfidenceClassifier:
        """Classifier used to assign tiers."""
        return self._classifier

    def parse_folder_name(self, folder_name: str) -> ParsedCandidate:
        """Parse a folder name in strict ``[Studio][Model]Title`` form.

        Args:
            folder_name: Folder name to parse.

        Returns:
            Parsed candidate. ``valid`` is False when the name does not
            follow the format or the studio segment is empty.
        """
        match = _EXACT_RE.match(folder_name)
        if not match:
            return self._invalid(folder_name, FORMAT_ERROR)

        studio = match.group(1).strip()
        model = match.group(2).strip()
        title = match.group(3).strip() or folder_name

        if not studio:
            return self._invalid(folder_name, EMPTY_STUDIO_ERROR, model=model, title=title)

        overall = self._settings.exact_overall_confidence
        return ParsedCandidate(
            studio=studio,
            model=model,
            title=title,
            confidence=FieldConfidence(
                studio=self._settings.exact_studio_confidence,
                model=self._settings.exact_model_confidence,
                overall=overall,
            ),
            method=ParseMethod.BRACKET,
            valid=True,
            tier=self._classifier.classify(overall),
            strategies=[ParseMethod.BRACKET],
        )

    def smart_parse_folder_name(self, folder_name: str) -> ParsedCandidate:
        """Parse a folder name with the strict form first, then heuristics.

        Args:
            folder_name: Folder name to parse.

        Returns:
            Parsed candidate with confidence and tier; always valid when the
            heuristic chain is used.
        """
        exact = self.parse_folder_name(folder_name)
        if exact.valid:
            if self._drop_duplicate_model(exact):
                exact.confidence.overall = self._classifier.overall(
                    exact.confidence.studio, exact.confidence.model
                )
                exact.tier = self._classifier.classify(exact.confidence.overall)
            return exact

        draft = ParsedCandidate(title=folder_name)
        for strategy in self._strategies:
            patch = strategy(folder_name, draft)
            if patch is not None:
                self._apply_patch(draft, patch)

        self._drop_duplicate_model(draft)
        draft.confidence.overall = self._classifier.overall(
            draft.confidence.studio, draft.confidence.model
        )
        draft.tier = self._classifier.classify(draft.confidence.overall)
        draft.method = self._resolve_method(draft.strategies)

        self.logger.debug(
            f"Parsed '{folder_name}': studio='{draft.studio}' model='{draft.model}' "
            f"overall={draft.confidence.overall} method={draft.method.value}"
        )
        return draft

    def bracket_strategy(self, folder_name: str, draft: ParsedCandidate) -> Optional[StrategyPatch]:
        """First valid ``[...]`` group is the studio, the second one the model."""
        groups = [inner for inner, _ in find_bracket_groups(folder_name) if is_identity_token(inner)]
        if not groups:
            return None

        patch = StrategyPatch(
            method=ParseMethod.BRACKET,
            studio=FieldGuess(value=groups[0], confidence=self._settings.bracket_studio_confidence),
        )
        if len(groups) > 1:
            patch.model = FieldGuess(
                value=groups[1], confidence=self._settings.bracket_model_confidence
            )
        return patch

    def at_separator_strategy(
        self, folder_name: str, draft: ParsedCandidate
    ) -> Optional[StrategyPatch]:
        """``Model @ Studio``: left part is the model, right part the studio."""
        if draft.studio and draft.model:
            return None

        parts = folder_name.split("@")
        if len(parts) != 2:
            return None

        left, right = _clean_part(parts[0]), _clean_part(parts[1])
        confidence = self._settings.at_separator_confidence
        patch = StrategyPatch(method=ParseMethod.SEPARATOR_AT)

        if not draft.model and is_identity_token(left):
            patch.model = FieldGuess(value=left, confidence=confidence)
        if not draft.studio and is_identity_token(right):
            patch.studio = FieldGuess(value=right, confidence=confidence)

        return patch if patch.studio or patch.model else None

    def hyphen_separator_strategy(
        self, folder_name: str, draft: ParsedCandidate
    ) -> Optional[StrategyPatch]:
        """``Studio - Model - ...`` after dropping bare date segments."""
        if draft.studio and draft.model:
            return None
        if "@" in folder_name or " - " not in folder_name:
            return None

        segments = [
            segment.strip()
            for segment in folder_name.split(" - ")
            if segment.strip() and not is_date_token(segment)
        ]
        confidence = self._settings.hyphen_separator_confidence
        patch = StrategyPatch(method=ParseMethod.SEPARATOR_HYPHEN)

        if not draft.studio and segments:
            studio = _clean_part(segments[0])
            if is_identity_token(studio):
                patch.studio = FieldGuess(value=studio, confidence=confidence)
        if not draft.model and len(segments) > 1:
            model = _clean_part(segments[1])
            if is_identity_token(model):
                patch.model = FieldGuess(value=model, confidence=confidence)

        return patch if patch.studio or patch.model else None

    def text_extraction_strategy(
        self, folder_name: str, draft: ParsedCandidate
    ) -> Optional[StrategyPatch]:
        """Look for a model name in what remains once the studio is removed."""
        if not draft.studio or draft.model:
            return None

        residual = remove_name_occurrences(folder_name, draft.studio)
        residual = strip_separators(collapse_whitespace(strip_bracket_groups(residual)))
        residual = strip_separators(strip_leading_date(residual))
        residual = strip_separators(strip_leading_serial(residual))

        names = extract_candidate_names(residual)
        if not names:
            return None

        name = names[0]
        if name.lower() == draft.studio.lower():
            return None

        return StrategyPatch(
            method=ParseMethod.TEXT_EXTRACTION,
            model=FieldGuess(value=name, confidence=self._settings.text_extraction_confidence),
        )

    @staticmethod
    def _drop_duplicate_model(candidate: ParsedCandidate) -> bool:
        """Clear a model that repeats the studio. Returns True when cleared."""
        if candidate.model and candidate.model == candidate.studio:
            candidate.model = ""
            candidate.confidence.model = 0
            return True
        return False

    def _apply_patch(self, draft: ParsedCandidate, patch: StrategyPatch) -> None:
        applied = False

        if patch.studio is not None and patch.studio.value and not draft.studio:
            draft.studio = patch.studio.value
            draft.confidence.studio = patch.studio.confidence
            applied = True

        if patch.model is not None and patch.model.value and not draft.model:
            draft.model = patch.model.value
            draft.confidence.model = patch.model.confidence
            applied = True

        if applied:
            draft.strategies.append(patch.method)

    @staticmethod
    def _resolve_method(strategies: List[ParseMethod]) -> ParseMethod:
        distinct = set(strategies)
        if not distinct:
            return ParseMethod.NONE
        if len(distinct) == 1:
            return strategies[0]
        return ParseMethod.SMART_ANALYSIS

    def _invalid(
        self, folder_name: str, error: str, model: str = "", title: Optional[str] = None
    ) -> ParsedCandidate:
        return ParsedCandidate(
            studio="",
            model=model,
            title=title or folder_name,
            confidence=FieldConfidence(),
            method=ParseMethod.NONE,
            valid=False,
            error=error,
            tier=self._classifier.classify(0),
        )
