from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from glam_store.config import Config


def _debug(msg: str) -> None:
    print(f"[sms] {msg}")


class SmsError(RuntimeError):
    """Provider call failed or the provider is not configured."""


@dataclass(frozen=True)
class SmsResult:
    simulated: bool
    sid: Optional[str] = None


def send_sms(cfg: Config, *, to: str, body: str, session: Any = None) -> SmsResult:
    """Send an SMS through the Twilio Messages API.

    In TEST_MODE nothing leaves the process and a simulated success is returned.
    Any provider problem is raised as SmsError (the caller maps it to a 500).
    """
    if cfg.TEST_MODE:
        _debug(f"TEST_MODE active: simulating SMS to {to}")
        return SmsResult(simulated=True)

    sid = cfg.TWILIO_ACCOUNT_SID
    token = cfg.TWILIO_AUTH_TOKEN
    sender = cfg.TWILIO_PHONE_NUMBER
    if not sid or not token or not sender:
        raise SmsError("Twilio credentials are not configured")

    url = f"{cfg.TWILIO_BASE_URL.rstrip('/')}/Accounts/{sid}/Messages.json"
    data: Dict[str, str] = {"To": to, "From": sender, "Body": body}
    http = session or requests
    _debug(f"Sending SMS via Twilio to {to}")
    try:
        r = http.post(url, data=data, auth=(sid, token), timeout=30)
    except requests.RequestException as e:
        raise SmsError(f"Twilio request failed: {e}") from e

    if r.status_code not in (200, 201):
        raise SmsError(f"Twilio error {r.status_code}: {r.text}")

    payload = r.json() if r.text else {}
    return SmsResult(simulated=False, sid=payload.get("sid"))
