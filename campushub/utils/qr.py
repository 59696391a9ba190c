import io
import json
import secrets
import string
from urllib.parse import urlencode

import qrcode
from flask import current_app

QR_PAYLOAD_TYPE = "event_checkin"
CHECK_IN_CODE_LENGTH = 12
CHECK_IN_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_check_in_code() -> str:
    return "".join(
        secrets.choice(CHECK_IN_CODE_ALPHABET) for _ in range(CHECK_IN_CODE_LENGTH)
    )


def generate_qr_token() -> str:
    return secrets.token_hex(16)


def normalize_check_in_code(code: str) -> str:
    return code.strip().upper()


def build_qr_payload(registration) -> dict:
    return {
        "type": QR_PAYLOAD_TYPE,
        "event_id": registration.event_id,
        "user_id": registration.user_id,
        "registration_id": registration.id,
        "qr_code": registration.qr_code,
        "check_in_code": registration.check_in_code,
    }


def build_qr_image_url(payload: dict) -> str:
    """URL of the external QR renderer with the JSON payload in its query string."""
    query = urlencode(
        {
            "size": current_app.config.get("QR_IMAGE_SIZE", "300x300"),
            "data": json.dumps(payload, separators=(",", ":")),
        }
    )
    return f"{current_app.config['QR_SERVICE_URL']}?{query}"


def render_qr_png(payload: dict) -> bytes:
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(json.dumps(payload, separators=(",", ":")))
    qr.make(fit=True)
    image = qr.make_image(fill_color="black", back_color="white")
    buffer = io.BytesIO()
    image.save(buffer)
    return buffer.getvalue()


def parse_credential(credential):
    """
    Split a scanned or typed credential into its kind.

    Returns ("code", normalized_code) for a manual check-in code or
    ("qr", payload_dict) for a QR payload. A string holding a JSON object is
    treated as a scanned QR payload. Raises ValueError for anything else.
    """
    if isinstance(credential, dict):
        payload = credential
    elif isinstance(credential, str):
        stripped = credential.strip()
        if not stripped:
            raise ValueError("Check-in code is required")
        try:
            decoded = json.loads(stripped)
        except ValueError:
            decoded = None
        if not isinstance(decoded, dict):
            return "code", normalize_check_in_code(stripped)
        payload = decoded
    else:
        raise ValueError("Unsupported check-in credential")

    if payload.get("type", QR_PAYLOAD_TYPE) != QR_PAYLOAD_TYPE:
        raise ValueError("Unsupported QR payload type")
    if "registration_id" not in payload or "qr_code" not in payload:
        raise ValueError("QR payload is missing registration_id or qr_code")
    try:
        registration_id = int(payload["registration_id"])
    except (TypeError, ValueError):
        raise ValueError("QR payload has an invalid registration_id")
    return "qr", {**payload, "registration_id": registration_id}
