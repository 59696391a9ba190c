import os
import requests


def check_registration_status(event_id):
    """Sign in as the demo student and print their registration and check-in credentials."""
    base_url = os.getenv("API_BASE_URL", "http://localhost:5001") + "/api"

    login_response = requests.post(
        f"{base_url}/auth/signin",
        json={"student_id": os.getenv("DEMO_STUDENT_ID", "2024001"), "password": "password"},
    )
    if login_response.status_code != 200:
        print(f"Login failed: {login_response.status_code} {login_response.text}")
        return

    token = login_response.json()["token"]
    headers = {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}

    response = requests.get(f"{base_url}/events/{event_id}/registration", headers=headers)
    if response.status_code != 200:
        print(f"Failed to get registration: {response.status_code} {response.text}")
        return

    data = response.json()
    print(f"Registration status for event {event_id}:")
    print("=" * 40)
    print(f"   State: {data['state']}")
    if data["state"] != "Unregistered":
        registration = data["registration"]
        print(f"   Check-in code: {registration['check_in_code']}")
        print(f"   Checked in at: {registration.get('checked_in_at') or 'N/A'}")
        print(f"   QR image: {data['qr_image_url']}")


if __name__ == "__main__":
    check_registration_status(int(os.getenv("EVENT_ID", 1)))
