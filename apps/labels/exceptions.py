"""
Exceptions raised by the label printing subsystem.
"""


class LabelError(Exception):
    """Base class for label printing errors."""

    pass


class InvalidAmount(LabelError, ValueError):
    """Raised when a price to encode is negative, non-finite or not a number."""

    pass


class InvalidEncodedPrice(LabelError, ValueError):
    """Raised when a printed price code is malformed or fails its checksum."""

    pass


class UnsupportedEncoding(LabelError, ValueError):
    """Raised for an unknown (method, version) encoding pair."""

    pass


class InvalidLabelFormat(LabelError, ValueError):
    """Raised when a print format configuration cannot be parsed."""

    pass


class UnknownUser(LabelError):
    """Raised when the acting user of a print job does not exist."""

    pass


class InventoryItemsNotFound(LabelError):
    """Raised when requested inventory ids do not exist."""

    def __init__(self, missing_ids):
        self.missing_ids = list(missing_ids)
        super().__init__(f"Inventory items not found: {', '.join(map(str, self.missing_ids))}")


class JobNotFound(LabelError):
    """Raised when a print job id does not exist."""

    def __init__(self, job_id):
        self.job_id = job_id
        super().__init__(f"Print job {job_id} not found")


class OrphanJobsDetected(LabelError):
    """
    Internal signal: a job listing hit jobs whose owning user no longer exists.

    Handled by JobHistory, which reconciles and retries; never shown to users.
    """

    def __init__(self, job_ids):
        self.job_ids = list(job_ids)
        super().__init__(f"{len(self.job_ids)} print job(s) reference a deleted user")
