"""
Label printing services.

- LabelCart: per-user queue of items waiting to be printed
- PrintJobManager: prices, encodes and records a batch of labels
- ReprintResolver: rebuilds a past job with its original prices
- JobHistory / OrphanReconciler: job listing with self-healing for jobs
  whose owner has been deleted
"""

import logging
import uuid
from dataclasses import asdict, dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import List, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction

from apps.inventory.models import InventoryItem

from . import encoding
from .exceptions import (
    InventoryItemsNotFound,
    JobNotFound,
    OrphanJobsDetected,
    UnknownUser,
)
from .formats import LabelFormat
from .models import LabelCartItem, PrintJob, PrintJobLine

logger = logging.getLogger(__name__)

REPRINT = "REPRINT"


def label_settings():
    return getattr(settings, "LABELS", {})


def parse_ids(values):
    """
    Split raw ids into unique UUIDs (first occurrence order) and unparseable values.
    """
    ids, invalid, seen = [], [], set()
    for value in values or []:
        try:
            parsed = value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))
        except (TypeError, ValueError, AttributeError):
            invalid.append(value)
            continue
        if parsed not in seen:
            seen.add(parsed)
            ids.append(parsed)
    return ids, invalid


def _user_pk(user):
    return getattr(user, "pk", user)


class MissingItemPolicy(str, Enum):
    """What to do when a print request names inventory ids that do not exist."""

    SKIP = "skip"
    ABORT = "abort"

    @classmethod
    def default(cls):
        return cls(label_settings().get("MISSING_ITEM_POLICY", cls.SKIP.value))


@dataclass(frozen=True)
class LabelRenderLine:
    """Everything the label renderer needs for one tag."""

    inventory_id: uuid.UUID
    sku: str
    item_name: str
    gem_type: str
    color: str
    weight_value: Decimal
    weight_unit: str
    weight_ratti: Optional[Decimal]
    shape: str
    dimensions: str
    stock_location: str
    price_amount: Decimal
    encoded_string: str
    checksum_digit: int
    pricing_mode: str
    selling_rate_per_carat: Optional[Decimal] = None

    @classmethod
    def build(cls, item, *, price_amount, encoded_string, checksum_digit, pricing_mode, rate=None):
        """Combine live display fields from ``item`` with the given price fields."""
        return cls(
            inventory_id=item.id,
            sku=item.sku,
            item_name=item.item_name,
            gem_type=item.gem_type or "",
            color=item.color_name,
            weight_value=item.weight_value,
            weight_unit=item.weight_unit,
            weight_ratti=item.weight_ratti,
            shape=item.shape or "",
            dimensions=item.dimensions_mm or "",
            stock_location=item.stock_location or "",
            price_amount=price_amount,
            encoded_string=encoded_string,
            checksum_digit=checksum_digit,
            pricing_mode=pricing_mode,
            selling_rate_per_carat=rate,
        )

    def as_dict(self):
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, (Decimal, uuid.UUID)):
                data[key] = str(value)
        return data


@dataclass
class CreatedJob:
    job_id: uuid.UUID
    lines: List[LabelRenderLine]
    skipped_ids: List[str] = field(default_factory=list)


@dataclass
class ReprintResult:
    job_id: uuid.UUID
    print_format: dict
    lines: List[LabelRenderLine]


@dataclass
class JobSummary:
    """A print job as shown in the history list."""

    id: uuid.UUID
    created_at: object
    owner_id: int
    owner_name: str
    owner_email: str
    total_items: int
    print_format: dict
    lines: List[dict]

    @classmethod
    def from_job(cls, job, owner):
        return cls(
            id=job.id,
            created_at=job.created_at,
            owner_id=owner.pk,
            owner_name=owner.display_name,
            owner_email=owner.email,
            total_items=job.total_items,
            print_format=job.print_format,
            lines=[
                {
                    "sku": line.sku,
                    "price_amount": str(line.price_amount),
                    "encoded_string": line.encoded_string,
                    "checksum_digit": line.checksum_digit,
                    "checksum_method": line.checksum_method,
                    "encoding_version": line.encoding_version,
                }
                for line in job.lines.all()
            ],
        )


class LabelCart:
    """Per-user label cart. Adding an item twice is a no-op."""

    def items(self, user):
        return (
            LabelCartItem.objects.filter(user_id=_user_pk(user))
            .select_related("inventory", "inventory__color_code")
            .order_by("-added_at")
        )

    def add(self, user, inventory_id):
        """
        Queue one item.

        Returns:
            True if a cart entry was created, False if it was already there

        Raises:
            InventoryItemsNotFound: If the item does not exist
        """
        ids, invalid = parse_ids([inventory_id])
        if invalid or not InventoryItem.objects.filter(id=ids[0]).exists():
            raise InventoryItemsNotFound([inventory_id])

        _, created = LabelCartItem.objects.get_or_create(user_id=_user_pk(user), inventory_id=ids[0])
        return created

    def add_many(self, user, inventory_ids):
        """Queue the given items, ignoring unknown ids and ones already queued; returns the count added."""
        ids, _ = parse_ids(inventory_ids)
        user_pk = _user_pk(user)

        existing = set(
            LabelCartItem.objects.filter(user_id=user_pk, inventory_id__in=ids).values_list(
                "inventory_id", flat=True
            )
        )
        known = set(InventoryItem.objects.filter(id__in=ids).values_list("id", flat=True))
        to_add = [item_id for item_id in ids if item_id in known and item_id not in existing]

        LabelCartItem.objects.bulk_create(
            [LabelCartItem(user_id=user_pk, inventory_id=item_id) for item_id in to_add],
            ignore_conflicts=True,
        )
        return len(to_add)

    def remove(self, user, cart_item_id):
        ids, _ = parse_ids([cart_item_id])
        if not ids:
            return False
        deleted, _ = LabelCartItem.objects.filter(user_id=_user_pk(user), id=ids[0]).delete()
        return deleted > 0

    def remove_many(self, user, inventory_ids):
        ids, _ = parse_ids(inventory_ids)
        deleted, _ = LabelCartItem.objects.filter(
            user_id=_user_pk(user), inventory_id__in=ids
        ).delete()
        return deleted

    def clear(self, user):
        deleted, _ = LabelCartItem.objects.filter(user_id=_user_pk(user)).delete()
        return deleted


class PrintJobManager:
    """
    Creates print jobs.

    Every price is computed and encoded before anything is written, so an
    encoding error leaves no partial job. The job, its lines and the cart
    clean-up are committed in one transaction.
    """

    def __init__(self, missing_item_policy=None, encoding_version=None, cart=None):
        self.missing_item_policy = (
            MissingItemPolicy(missing_item_policy)
            if missing_item_policy
            else MissingItemPolicy.default()
        )
        self.encoding_version = encoding_version or label_settings().get(
            "ENCODING_VERSION", encoding.CURRENT_VERSION
        )
        self.cart = cart or LabelCart()

    @staticmethod
    def price_to_encode(item):
        """Label price of an inventory item, rounded to paise."""
        return Decimal(item.label_price()).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    def create_job(self, inventory_ids, print_format, acting_user_id):
        """
        Record a print job for the given inventory items.

        Args:
            inventory_ids: Inventory item ids, in print order (duplicates collapsed)
            print_format: LabelFormat or a mapping accepted by LabelFormat.from_dict
            acting_user_id: Id of the user printing

        Returns:
            CreatedJob with the job id, one render line per printed item and
            the ids that were skipped

        Raises:
            UnknownUser: If the acting user does not exist
            InventoryItemsNotFound: Under the abort policy when any id is
                unknown, or when none of the ids exist
            InvalidAmount: If an item's price cannot be encoded
            InvalidLabelFormat: If the print format is invalid
        """
        label_format = (
            print_format if isinstance(print_format, LabelFormat) else LabelFormat.from_dict(print_format)
        )

        try:
            user_exists = get_user_model().objects.filter(pk=acting_user_id).exists()
        except (TypeError, ValueError):
            user_exists = False
        if not user_exists:
            raise UnknownUser(f"User {acting_user_id} does not exist")

        ids, invalid = parse_ids(inventory_ids)
        items = InventoryItem.objects.select_related("color_code").in_bulk(ids)
        found = [items[item_id] for item_id in ids if item_id in items]
        missing = [str(value) for value in invalid] + [
            str(item_id) for item_id in ids if item_id not in items
        ]

        if missing and self.missing_item_policy == MissingItemPolicy.ABORT:
            raise InventoryItemsNotFound(missing)
        if not found:
            raise InventoryItemsNotFound(missing)
        if missing:
            logger.warning("Skipping %d unknown inventory id(s) in print job: %s", len(missing), missing)

        priced = []
        for item in found:
            price = self.price_to_encode(item)
            priced.append((item, price, encoding.encode(price, version=self.encoding_version)))

        with transaction.atomic():
            job = PrintJob.objects.create(
                owner_id=acting_user_id,
                print_format=label_format.as_dict(),
                total_items=len(priced),
            )
            PrintJobLine.objects.bulk_create(
                [
                    PrintJobLine(
                        job=job,
                        position=position,
                        sku=item.sku,
                        price_amount=price,
                        encoded_string=encoded.encoded_string,
                        checksum_digit=encoded.checksum_digit,
                        checksum_method=encoded.method,
                        encoding_version=encoded.version,
                    )
                    for position, (item, price, encoded) in enumerate(priced)
                ]
            )
            removed = self.cart.remove_many(acting_user_id, ids)

        logger.info(
            "Print job %s created by user %s: %d label(s), %d cart entr(ies) cleared",
            job.id,
            acting_user_id,
            len(priced),
            removed,
        )

        lines = [
            LabelRenderLine.build(
                item,
                price_amount=price,
                encoded_string=encoded.encoded_string,
                checksum_digit=encoded.checksum_digit,
                pricing_mode=item.pricing_mode,
                rate=item.selling_rate_per_carat,
            )
            for item, price, encoded in priced
        ]
        return CreatedJob(job_id=job.id, lines=lines, skipped_ids=missing)


class ReprintResolver:
    """
    Rebuilds the labels of a past job.

    Display fields come from the current inventory record; price fields come
    only from the stored job lines, so a reprinted tag shows exactly the
    price printed originally. Lines whose inventory record is gone are left out.
    """

    def _get_job(self, job_id):
        try:
            return PrintJob.objects.get(pk=job_id)
        except (PrintJob.DoesNotExist, ValidationError, ValueError):
            raise JobNotFound(job_id)

    def reprint(self, job_id):
        """
        Raises:
            JobNotFound: If no job has this id
        """
        return self._lines_for(self._get_job(job_id))

    def reprint_job(self, job_id):
        """Like ``reprint`` but also returns the stored print format."""
        job = self._get_job(job_id)
        return ReprintResult(job_id=job.id, print_format=job.print_format, lines=self._lines_for(job))

    def _lines_for(self, job):
        job_lines = list(job.lines.order_by("position"))
        inventory = {
            item.sku: item
            for item in InventoryItem.objects.select_related("color_code").filter(
                sku__in=[line.sku for line in job_lines]
            )
        }

        lines = []
        for line in job_lines:
            item = inventory.get(line.sku)
            if item is None:
                logger.info("Reprint of job %s: inventory %s no longer exists, line dropped", job.id, line.sku)
                continue
            lines.append(
                LabelRenderLine.build(
                    item,
                    price_amount=line.price_amount,
                    encoded_string=line.encoded_string,
                    checksum_digit=line.checksum_digit,
                    pricing_mode=REPRINT,
                )
            )
        return lines


class OrphanReconciler:
    """
    Deletes print jobs whose owning user no longer exists.

    Idempotent; job lines go with their job through the cascade.
    """

    def reconcile(self):
        """
        Returns:
            Number of print jobs deleted
        """
        owner_ids = set(PrintJob.objects.order_by().values_list("owner_id", flat=True))
        if not owner_ids:
            return 0

        valid_ids = set(
            get_user_model().objects.filter(pk__in=owner_ids).values_list("pk", flat=True)
        )
        dangling = owner_ids - valid_ids
        if not dangling:
            return 0

        with transaction.atomic():
            _, per_model = PrintJob.objects.filter(owner_id__in=dangling).delete()

        deleted = per_model.get(PrintJob._meta.label, 0)
        logger.warning(
            "Deleted %d orphan print job(s) owned by %d missing user(s)", deleted, len(dangling)
        )
        return deleted


class JobHistory:
    """Lists recent print jobs, repairing orphaned ones on the way."""

    def __init__(self, reconciler=None):
        self.reconciler = reconciler or OrphanReconciler()

    def list_jobs(self, limit=None):
        """
        Newest jobs first.

        If any job refers to a deleted user, the reconciler runs and the
        listing is retried exactly once.
        """
        limit = limit or label_settings().get("JOB_HISTORY_LIMIT", 50)
        try:
            return self._fetch(limit)
        except OrphanJobsDetected as e:
            logger.warning("%s; reconciling and retrying", e)
            self.reconciler.reconcile()

        try:
            return self._fetch(limit)
        except OrphanJobsDetected:
            logger.error("Print job listing still references deleted users after reconciliation")
            raise

    def _fetch(self, limit):
        jobs = list(PrintJob.objects.order_by("-created_at").prefetch_related("lines")[:limit])

        # Owners are loaded on their own: a join would silently hide dangling rows
        owners = get_user_model().objects.in_bulk({job.owner_id for job in jobs})
        orphans = [job.id for job in jobs if job.owner_id not in owners]
        if orphans:
            raise OrphanJobsDetected(orphans)

        return [JobSummary.from_job(job, owners[job.owner_id]) for job in jobs]

    def job_detail(self, job_id):
        """
        A single job with its stored print format and reprint lines.

        Raises:
            JobNotFound: If no job has this id
        """
        return ReprintResolver().reprint_job(job_id)
