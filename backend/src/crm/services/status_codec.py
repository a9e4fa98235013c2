"""
Status Codec
Stores the "Formal Meeting" status, which the enquiries table cannot hold,
as status "Enquiry" plus a reserved prefix on the remarks text.

Compatibility shim only: once the status column accepts "Formal Meeting"
this module and the marker can be dropped. A user typing the marker at the
start of an "Enquiry" remark will read back as a Formal Meeting.
"""

import logging
from typing import Optional, Tuple, Union

from crm.models.enquiry import PersistedStatus
from crm.schemas.enquiry import EnquiryStatus

logger = logging.getLogger(__name__)

FORMAL_MEETING_MARKER = "[Formal Meeting]"


def encode(status: EnquiryStatus, remarks: Optional[str]) -> Tuple[PersistedStatus, Optional[str]]:
    """
    Map a logical status and remarks to their stored form

    Args:
        status: Logical status
        remarks: Remarks as the user wrote them

    Returns:
        (persisted status, persisted remarks)
    """
    status = EnquiryStatus(status)
    if status == EnquiryStatus.FORMAL_MEETING:
        return PersistedStatus.ENQUIRY, f"{FORMAL_MEETING_MARKER} {remarks or ''}"

    if status == EnquiryStatus.ENQUIRY and remarks and remarks.startswith(FORMAL_MEETING_MARKER):
        logger.warning(f"Remarks start with the reserved marker {FORMAL_MEETING_MARKER!r}; will read back as Formal Meeting")

    return PersistedStatus(status.value), remarks


def decode(
    persisted_status: Union[PersistedStatus, str], persisted_remarks: Optional[str]
) -> Tuple[EnquiryStatus, Optional[str]]:
    """Inverse of encode()"""
    persisted_status = PersistedStatus(persisted_status)
    if (
        persisted_status == PersistedStatus.ENQUIRY
        and persisted_remarks
        and persisted_remarks.startswith(FORMAL_MEETING_MARKER)
    ):
        remarks = persisted_remarks[len(FORMAL_MEETING_MARKER) :]
        if remarks.startswith(" "):
            remarks = remarks[1:]
        return EnquiryStatus.FORMAL_MEETING, remarks

    return EnquiryStatus(persisted_status.value), persisted_remarks
