from .billing import PlanRecording, PlanUsage, PlanUsageDetail
from .meeting import (
    EndAction,
    Meeting,
    MeetingRequest,
    MeetingSettings,
    Occurrence,
    RecordingFile,
    Recurrence,
)
from .page import ZoomPage
from .report import Participant
from .result import Err, ErrorKind, Ok, PagedResult, Result
from .user import User, UserInfo, UserRequest, UserUpdate

__all__ = [
    'EndAction',
    'Err',
    'ErrorKind',
    'Meeting',
    'MeetingRequest',
    'MeetingSettings',
    'Occurrence',
    'Ok',
    'PagedResult',
    'Participant',
    'PlanRecording',
    'PlanUsage',
    'PlanUsageDetail',
    'RecordingFile',
    'Recurrence',
    'Result',
    'User',
    'UserInfo',
    'UserRequest',
    'UserUpdate',
    'ZoomPage',
]
