"""Manual smoke check against a running server: python check_api.py [base_url]"""

import sys

import requests

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:4000"

SAMPLE_TEXT = (
    "Photosynthesis is the process used by plants, algae and certain bacteria "
    "to harness energy from sunlight and turn it into chemical energy. "
    "This process takes place in the chloroplasts, specifically using chlorophyll."
)


def check_health():
    try:
        r = requests.get(f"{BASE_URL}/", timeout=10)
        print("Health Check:", r.status_code, r.json())
    except requests.RequestException as e:
        print("Health Check Failed:", e)


def check_generate_quiz():
    payload = {"text": SAMPLE_TEXT, "level": "easy", "count": 3, "type": "mixed"}
    try:
        print("Sending /api/generate-quiz ...")
        r = requests.post(f"{BASE_URL}/api/generate-quiz", json=payload, timeout=120)
        print("Status:", r.status_code)
        if r.status_code == 200:
            data = r.json()
            print("Meta:", data.get("meta"))
            for q in data["questions"]:
                print(f"  {q['id']}. [{q['type']}] {q['question']} → {q['answer']}")
            return data["questions"]
        print("Error:", r.text)
    except requests.RequestException as e:
        print("Generate Failed:", e)
    return []


def check_translate(items):
    if not items:
        return
    try:
        r = requests.post(f"{BASE_URL}/translate", json={"items": items, "targetLang": "en"}, timeout=120)
        print("Translate:", r.status_code, r.json().get("meta"))
    except requests.RequestException as e:
        print("Translate Failed:", e)


if __name__ == "__main__":
    check_health()
    check_translate(check_generate_quiz())
