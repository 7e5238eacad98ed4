"""
MOCK attack predictor.

Placeholder for a threat-analysis feature. There is no model behind it: after
an artificial delay it flips a fair coin and picks canned messages. Results
live only in memory for the current browser session.
"""
import logging
import random
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Literal, Optional

from core import config
from core.errors import BusyError
from core.evidence.registry import CRITICALITY_LEVELS
from core.notify import Notification, error, info
from core.util.ids import new_prediction_id

logger = logging.getLogger(__name__)

ATTACK_MESSAGES = [
    "Potential phishing attempt detected",
    "Suspicious network activity identified",
    "Malware signature found in evidence",
    "Social engineering pattern detected",
    "Data exfiltration attempt identified",
    "Unauthorized access pattern detected",
]

CLEAR_MESSAGES = [
    "No threats detected in current analysis",
    "Evidence appears clean and secure",
    "No malicious patterns identified",
    "System analysis shows normal behavior",
    "No security concerns found",
]


@dataclass(frozen=True)
class PredictionResult:
    id: str
    status: Literal["found", "not_found"]
    details: str
    timestamp: datetime
    criticality: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status == "found"


def prediction_notification(result: PredictionResult) -> Notification:
    if not result.found:
        return info("Analysis Complete", "No threats detected in current analysis.")
    if result.criticality == "high":
        return error("High Risk Attack Detected!", "Admin has been notified of this critical threat.")
    return error("Attack Detected", f"{result.criticality.upper()} risk threat identified.")


class MockPredictor:
    """
    Args:
        rng: source of randomness (inject a seeded Random in tests)
        sleep: blocking sleep used for the artificial delay
        delay_window: (min, max) seconds of simulated processing time
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
        delay_window: tuple[float, float] = (config.PREDICT_DELAY_MIN, config.PREDICT_DELAY_MAX),
    ):
        self._rng = rng or random.Random()
        self._sleep = sleep
        self._delay_window = delay_window
        self._lock = threading.Lock()
        self.results: list[PredictionResult] = []

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def clear(self) -> None:
        """Forget the result log, e.g. when the signed-in account changes."""
        self.results = []

    def predict(self) -> tuple[PredictionResult, Notification]:
        """Run one mock analysis and prepend its result.

        Raises BusyError if another prediction is still running.
        """
        if not self._lock.acquire(blocking=False):
            raise BusyError("A prediction is already running")
        try:
            self._sleep(self._rng.uniform(*self._delay_window))
            result = self._generate()
            self.results.insert(0, result)
        finally:
            self._lock.release()
        logger.info("Mock prediction %s: %s (%s)", result.id, result.status, result.criticality or "-")
        return result, prediction_notification(result)

    def _generate(self) -> PredictionResult:
        now = datetime.now(timezone.utc)
        if self._rng.random() < 0.5:
            return PredictionResult(
                id=new_prediction_id(self._rng),
                status="found",
                criticality=self._rng.choice(CRITICALITY_LEVELS),
                details=self._rng.choice(ATTACK_MESSAGES),
                timestamp=now,
            )
        return PredictionResult(
            id=new_prediction_id(self._rng),
            status="not_found",
            details=self._rng.choice(CLEAR_MESSAGES),
            timestamp=now,
        )
