"""
Vérifications rapides d'une instance en ligne de l'API.

    python -m scripts.smoke_api --base-url http://localhost:8000
"""

import argparse
import json
import sys

import requests


class Colors:
    GREEN = '\033[92m'
    RED = '\033[91m'
    CYAN = '\033[96m'
    END = '\033[0m'


class SmokeTester:
    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")
        self.test_count = 0
        self.success_count = 0
        self.fail_count = 0

    def check(self, method: str, path: str, description: str, expected_status: int = 200, **kwargs):
        self.test_count += 1
        print(f"{Colors.CYAN}\nTEST #{self.test_count}: {method} {path} - {description}{Colors.END}")
        try:
            response = requests.request(method, f"{self.base_url}{path}", timeout=30, **kwargs)
        except requests.RequestException as e:
            self.fail_count += 1
            print(f"{Colors.RED}❌ ÉCHEC: {e}{Colors.END}")
            return None

        try:
            data = response.json()
        except ValueError:
            data = response.text[:500]
        print(json.dumps(data, indent=2, ensure_ascii=False)[:800])

        if response.status_code == expected_status:
            self.success_count += 1
            print(f"{Colors.GREEN}✅ SUCCÈS ({response.status_code}){Colors.END}")
        else:
            self.fail_count += 1
            print(f"{Colors.RED}❌ ÉCHEC: code {response.status_code}, attendu {expected_status}{Colors.END}")
        return data

    def summary(self) -> bool:
        print(f"\nTotal: {self.test_count} | Succès: {self.success_count} | Échecs: {self.fail_count}")
        return self.fail_count == 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="Smoke tests de l'API Prescriptions Manager")
    parser.add_argument("--base-url", default="http://localhost:8000")
    args = parser.parse_args(argv)

    tester = SmokeTester(args.base_url)
    tester.check("GET", "/health", "Service en ligne")
    tester.check("GET", "/api/diseases", "Liste des maladies", params={"limit": 5})
    tester.check("GET", "/api/medications", "Liste des médicaments", params={"limit": 5})
    tester.check("GET", "/api/prescriptions", "Liste des ordonnances types", params={"limit": 5})
    tester.check("POST", "/api/search", "Recherche globale", json={"query": "cold", "type": "all"})
    tester.check("GET", "/api/config/ai_enabled", "Lecture de la configuration IA")
    return 0 if tester.summary() else 1


if __name__ == "__main__":
    sys.exit(main())
