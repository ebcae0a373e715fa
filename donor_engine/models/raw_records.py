"""
Shapes of the raw records returned by the data-fetch layer.

These describe what the adapters expect to read. Real records routinely
violate them (missing keys, strings where numbers belong), which is why the
adapters read every field defensively instead of trusting these types.
"""

from typing import TypedDict, Union


class RawBloodInfo(TypedDict, total=False):
    bloodType: str
    quantity: float  # milliliters


class RawAppointmentDetails(TypedDict, total=False):
    donationCenter: str
    preferredDate: str
    preferredTime: str


class RawHospitalDonation(TypedDict, total=False):
    _id: str
    status: str  # pending, approved, rejected, completed, cancelled
    bloodInfo: RawBloodInfo
    submittedAt: str
    createdAt: str
    donationCenter: str
    appointmentDetails: RawAppointmentDetails


class RawDonorRegistration(TypedDict, total=False):
    _id: str
    isActive: bool
    registeredAt: str
    createdAt: str
    bloodInfo: Union[RawBloodInfo, str]
    bloodType: str


class RawPayment(TypedDict, total=False):
    transactionId: str
    amount: float
    status: str  # SUCCESS, PENDING, FAILED, CANCELLED, REFUNDED
    createdAt: str
