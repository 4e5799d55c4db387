"""Bullhorn REST API client and domain sub-APIs."""

from .client import BullhornClient
from .candidates import CandidatesAPI
from .files import FilesAPI
from .jobs import JobOrdersAPI
from .submissions import SubmissionsAPI
from .tearsheets import TearsheetsAPI

__all__ = [
    "BullhornClient",
    "CandidatesAPI",
    "FilesAPI",
    "JobOrdersAPI",
    "SubmissionsAPI",
    "TearsheetsAPI",
]
