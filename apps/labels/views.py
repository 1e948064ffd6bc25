"""
Views for label printing.

- Label cart: queue, list and remove items before printing
- Print jobs: create a job from inventory ids, list recent jobs
- Reprint: original prices of a past job merged with live item details
- Price verification: decode a price code read off a printed tag
"""

import logging
from dataclasses import asdict

from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from . import encoding
from .exceptions import (
    InvalidAmount,
    InvalidEncodedPrice,
    InventoryItemsNotFound,
    JobNotFound,
    UnknownUser,
    UnsupportedEncoding,
)
from .serializers import (
    CartAddSerializer,
    LabelCartItemSerializer,
    PrintJobCreateSerializer,
    VerifyPriceSerializer,
)
from .services import JobHistory, LabelCart, PrintJobManager

logger = logging.getLogger(__name__)


@api_view(["GET", "POST", "DELETE"])
@permission_classes([permissions.IsAuthenticated])
def label_cart(request):
    """
    The current user's label cart.

    GET lists queued items (newest first), POST adds ``inventory_id`` or
    ``inventory_ids``, DELETE empties the cart.
    """
    cart = LabelCart()

    if request.method == "GET":
        items = cart.items(request.user)
        return Response(
            {"items": LabelCartItemSerializer(items, many=True).data, "count": len(items)},
            status=status.HTTP_200_OK,
        )

    if request.method == "DELETE":
        removed = cart.clear(request.user)
        return Response({"removed": removed}, status=status.HTTP_200_OK)

    serializer = CartAddSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    inventory_ids = list(serializer.validated_data.get("inventory_ids") or [])
    if serializer.validated_data.get("inventory_id"):
        try:
            created = cart.add(request.user, serializer.validated_data["inventory_id"])
        except InventoryItemsNotFound as e:
            return Response({"detail": str(e)}, status=status.HTTP_404_NOT_FOUND)
        added = 1 if created else 0
    else:
        added = 0

    if inventory_ids:
        added += cart.add_many(request.user, inventory_ids)

    return Response({"added": added}, status=status.HTTP_201_CREATED if added else status.HTTP_200_OK)


@api_view(["DELETE"])
@permission_classes([permissions.IsAuthenticated])
def label_cart_item(request, cart_item_id):
    """Remove one entry from the current user's cart."""
    if not LabelCart().remove(request.user, cart_item_id):
        return Response({"detail": "Cart item not found."}, status=status.HTTP_404_NOT_FOUND)
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(["GET", "POST"])
@permission_classes([permissions.IsAuthenticated])
def print_jobs(request):
    """
    Print job history and creation.

    GET returns the most recent jobs. POST body:
    {
        "inventory_ids": ["uuid", ...],
        "print_format": {...} (optional, TAG defaults),
        "missing_item_policy": "skip|abort" (optional)
    }
    and responds with the job id and one render line per printed label.
    """
    if request.method == "GET":
        jobs = JobHistory().list_jobs()
        return Response({"jobs": [asdict(job) for job in jobs]}, status=status.HTTP_200_OK)

    serializer = PrintJobCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = serializer.validated_data
    manager = PrintJobManager(missing_item_policy=data.get("missing_item_policy"))

    try:
        created = manager.create_job(
            data["inventory_ids"],
            data.get("print_format"),
            request.user.pk,
        )
    except InventoryItemsNotFound as e:
        return Response(
            {"detail": str(e), "missing_ids": e.missing_ids},
            status=status.HTTP_400_BAD_REQUEST,
        )
    except (InvalidAmount, UnsupportedEncoding) as e:
        logger.warning("Print job rejected for user %s: %s", request.user.pk, e)
        return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except UnknownUser as e:
        return Response({"detail": str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(
        {
            "job_id": str(created.job_id),
            "lines": [line.as_dict() for line in created.lines],
            "skipped_ids": created.skipped_ids,
        },
        status=status.HTTP_201_CREATED,
    )


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def print_job_reprint(request, job_id):
    """Labels of a past job, priced exactly as originally printed."""
    try:
        result = JobHistory().job_detail(job_id)
    except JobNotFound:
        return Response({"detail": "Print job not found."}, status=status.HTTP_404_NOT_FOUND)

    return Response(
        {
            "job_id": str(result.job_id),
            "print_format": result.print_format,
            "lines": [line.as_dict() for line in result.lines],
        },
        status=status.HTTP_200_OK,
    )


@api_view(["POST"])
@permission_classes([permissions.IsAuthenticated])
def verify_price(request):
    """Check a tag's price code and return the price it encodes."""
    serializer = VerifyPriceSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    encoded_string = serializer.validated_data["encoded_string"]
    version = serializer.validated_data.get("version", encoding.CURRENT_VERSION)

    try:
        amount = encoding.decode(encoded_string, version=version)
    except (InvalidEncodedPrice, UnsupportedEncoding) as e:
        return Response(
            {"valid": False, "detail": str(e)},
            status=status.HTTP_400_BAD_REQUEST,
        )

    return Response(
        {"valid": True, "encoded_string": encoded_string, "amount": str(amount)},
        status=status.HTTP_200_OK,
    )
