"""Live system state: the service client and the visibility-gated poller."""

from pytuner.live.client import HttpLiveStateClient, LiveStateClient
from pytuner.live.poll import PollController, PollState

__all__ = [
    "HttpLiveStateClient",
    "LiveStateClient",
    "PollController",
    "PollState",
]
