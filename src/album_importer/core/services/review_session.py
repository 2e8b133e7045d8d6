"""In-memory review session for parsed folder candidates."""

from typing import Dict, Iterable, List, Sequence, Tuple

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import ReviewSessionError
from ..interfaces import IFolderNameParser
from ..models import (
    ConfidenceTier,
    ImportItem,
    ItemAction,
    ParsedCandidate,
    ReviewItem,
    ReviewStatus,
    TierAction,
)
from .confidence import ConfidenceClassifier


class ReviewSession(LoggerMixin):
    """Operator review of one batch of parsed folders.

    Every item starts ``pending``. Bulk tier actions, single-item actions
    and edits move items to ``confirmed``, ``skipped`` or ``edited``; there
    is no way back to ``pending``. The session owns copies of its
    candidates, so callers never see their inputs modified.
    """

    def __init__(
        self,
        folder_names: Sequence[str],
        candidates: Sequence[ParsedCandidate],
        classifier: ConfidenceClassifier,
        human_verified_confidence: int = 95,
    ):
        """Initialize review session.

        Args:
            folder_names: Folder names in batch order.
            candidates: Parsed candidate for each folder, same order.
            classifier: Classifier used to compute tiers.
            human_verified_confidence: Confidence given to edited fields.

        Raises:
            ReviewSessionError: If the folder and candidate counts differ.
        """
        if len(folder_names) != len(candidates):
            raise ReviewSessionError(
                f"Got {len(candidates)} candidates for {len(folder_names)} folders"
            )

        self._folder_names: Tuple[str, ...] = tuple(folder_names)
        self._classifier = classifier
        self._human_verified_confidence = human_verified_confidence
        self._items: List[ReviewItem] = [
            ReviewItem(
                id=f"item-{index}",
                folder_name=folder_name,
                candidate=candidate.model_copy(deep=True),
            )
            for index, (folder_name, candidate) in enumerate(zip(self._folder_names, candidates))
        ]
        self._index: Dict[str, ReviewItem] = {item.id: item for item in self._items}

    @classmethod
    def from_folders(
        cls, folder_names: Iterable[str], parser: IFolderNameParser, config: Config
    ) -> "ReviewSession":
        """Build a session by smart-parsing every folder name.

        Args:
            folder_names: Folder names in batch order.
            parser: Folder name parser.
            config: Application configuration.

        Returns:
            New review session.
        """
        names = list(folder_names)
        candidates = [parser.smart_parse_folder_name(name) for name in names]
        return cls(
            names,
            candidates,
            ConfidenceClassifier(config),
            config.parsing.human_verified_confidence,
        )

    @property
    def folder_names(self) -> Tuple[str, ...]:
        """Folder names in batch order."""
        return self._folder_names

    @property
    def items(self) -> List[ReviewItem]:
        """Review items in batch order."""
        return list(self._items)

    def get_item(self, item_id: str) -> ReviewItem:
        """Get an item by id.

        Raises:
            ReviewSessionError: If no item has the id.
        """
        try:
            return self._index[item_id]
        except KeyError:
            raise ReviewSessionError(f"Unknown review item: {item_id}") from None

    def tier_of(self, item_id: str) -> ConfidenceTier:
        """Tier of an item, from its current overall confidence."""
        item = self.get_item(item_id)
        return self._classifier.classify(item.candidate.confidence.overall)

    def items_in_tier(self, tier: ConfidenceTier) -> List[ReviewItem]:
        """Items whose current overall confidence falls in the tier."""
        return [
            item
            for item in self._items
            if self._classifier.classify(item.candidate.confidence.overall) == tier
        ]

    def stats(self) -> Dict[str, int]:
        """Count items per status."""
        counts = {"total": len(self._items)}
        for status in ReviewStatus:
            counts[status.value] = sum(1 for item in self._items if item.status == status)
        return counts

    def apply_tier_action(self, tier: ConfidenceTier, action: TierAction) -> List[str]:
        """Confirm or skip every item in a tier, whatever its current status.

        Membership is taken once, when the action is applied.

        Args:
            tier: Tier to act on.
            action: Bulk action.

        Returns:
            Ids of the affected items.
        """
        status = (
            ReviewStatus.CONFIRMED if action == TierAction.CONFIRM_ALL else ReviewStatus.SKIPPED
        )
        affected = [item.id for item in self.items_in_tier(tier)]
        for item_id in affected:
            self._index[item_id].status = status

        self.logger.info(f"{action.value} on {tier.value} tier: {len(affected)} item(s)")
        return affected

    def edit_item(self, item_id: str, studio: str, model: str) -> ReviewItem:
        """Replace an item's studio and model with operator-supplied values.

        Both field confidences become the human-verified constant and the
        item is marked ``edited``.

        Args:
            item_id: Item id.
            studio: Studio name.
            model: Model name.

        Returns:
            Updated item.
        """
        item = self.get_item(item_id)
        confidence = item.candidate.confidence

        item.candidate.studio = studio.strip()
        item.candidate.model = model.strip()
        confidence.studio = self._human_verified_confidence
        confidence.model = self._human_verified_confidence
        confidence.overall = self._classifier.overall(confidence.studio, confidence.model)
        item.candidate.tier = self._classifier.classify(confidence.overall)
        item.candidate.valid = True
        item.candidate.error = None
        item.status = ReviewStatus.EDITED

        self.logger.debug(f"Edited {item_id}: studio='{studio}' model='{model}'")
        return item

    def item_action(self, item_id: str, action: ItemAction) -> ReviewItem:
        """Confirm or skip a single item without touching its values."""
        item = self.get_item(item_id)
        item.status = ReviewStatus.CONFIRMED if action == ItemAction.CONFIRM else ReviewStatus.SKIPPED
        return item

    def pending_items(self) -> List[ReviewItem]:
        """Items nobody has acted on yet."""
        return [item for item in self._items if item.status == ReviewStatus.PENDING]

    def ready_items(self) -> List[ReviewItem]:
        """Confirmed and edited items in batch order."""
        return [item for item in self._items if item.is_ready]

    def to_import_items(self) -> List[ImportItem]:
        """Ready items as import requests."""
        return [
            ImportItem(
                folder_name=item.folder_name,
                studio=item.candidate.studio,
                model=item.candidate.model,
                title=item.candidate.title,
            )
            for item in self.ready_items()
        ]
