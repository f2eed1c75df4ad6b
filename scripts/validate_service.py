#!/usr/bin/env python3
"""
Validation script for URL Shortener service.
Exercises a live running service to check create, redirect and stats work end to end.
"""

import sys
import time
import argparse
import requests
from typing import Optional
from datetime import datetime


class ServiceValidator:
    """Validates URL shortener service functionality."""
    
    def __init__(self, base_url: str = "http://localhost:8080", timeout: float = 5):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.test_results = []
    
    def print_header(self, text: str):
        print(f"\n{'='*60}")
        print(f"  {text}")
        print(f"{'='*60}\n")
    
    def record(self, name: str, passed: bool, details: str = "") -> bool:
        """Record and print one check result."""
        status = "PASS" if passed else "FAIL"
        self.test_results.append((name, passed))
        print(f"[{status}] {name}")
        if details:
            print(f"       {details}")
        return passed
    
    def check_health(self) -> bool:
        try:
            response = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
        except requests.RequestException as e:
            return self.record("Health Check", False, f"Error: {e}")
        
        if response.status_code != 200:
            return self.record("Health Check", False, f"Status: {response.status_code}")
        
        data = response.json()
        return self.record(
            "Health Check",
            data.get("status") == "healthy",
            f"URLs stored: {data.get('urls_stored')}, clicks: {data.get('total_clicks')}",
        )
    
    def check_create(self) -> Optional[dict]:
        """Create a short URL; returns the response body on success."""
        test_url = f"https://example.com/validate/{int(time.time())}"
        try:
            response = self.session.post(
                f"{self.base_url}/shorten",
                json={"url": test_url},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            self.record("Create Short URL", False, f"Error: {e}")
            return None
        
        if response.status_code != 201:
            self.record("Create Short URL", False, f"Status: {response.status_code} (expected 201)")
            return None
        
        data = response.json()
        passed = data.get("original_url") == test_url and bool(data.get("short_code"))
        self.record("Create Short URL", passed, f"Code: {data.get('short_code')}, URL: {data.get('short_url')}")
        return data if passed else None
    
    def check_clicks(self, short_code: str, expected: int) -> bool:
        name = f"Stats Reports {expected} Click(s)"
        try:
            response = self.session.get(f"{self.base_url}/stats/{short_code}", timeout=self.timeout)
        except requests.RequestException as e:
            return self.record(name, False, f"Error: {e}")
        
        if response.status_code != 200:
            return self.record(name, False, f"Status: {response.status_code}")
        
        clicks = response.json().get("clicks")
        return self.record(name, clicks == expected, f"Clicks: {clicks}")
    
    def check_redirect(self, short_code: str, original_url: str) -> bool:
        try:
            response = self.session.get(
                f"{self.base_url}/{short_code}",
                allow_redirects=False,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            return self.record("URL Redirect", False, f"Error: {e}")
        
        location = response.headers.get("Location", "")
        return self.record(
            "URL Redirect",
            response.status_code == 302 and location == original_url,
            f"Status: {response.status_code}, Location: {location or 'none'}",
        )
    
    def check_status(self, name: str, method: str, path: str, expected: int, **kwargs) -> bool:
        """Check that a request is answered with the expected status and a JSON error."""
        try:
            response = self.session.request(
                method,
                f"{self.base_url}{path}",
                allow_redirects=False,
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            return self.record(name, False, f"Error: {e}")
        
        try:
            has_error = "error" in response.json()
        except ValueError:
            has_error = False
        
        return self.record(
            name,
            response.status_code == expected and has_error,
            f"Status: {response.status_code} (expected {expected})",
        )
    
    def check_descriptor(self) -> bool:
        try:
            response = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        except requests.RequestException as e:
            return self.record("Service Descriptor", False, f"Error: {e}")
        
        ok = response.status_code == 200 and "service" in response.json()
        return self.record("Service Descriptor", ok, f"Status: {response.status_code}")
    
    def run_all_tests(self) -> bool:
        """Run all validation checks."""
        self.print_header("URL Shortener Service Validation")
        print(f"Testing service at: {self.base_url}")
        print(f"Timestamp: {datetime.now().isoformat()}\n")
        
        if not self.check_health():
            print("\nHealth check failed. Service may not be running.")
            print(f"   Make sure the service is accessible at {self.base_url}")
            return False
        
        print()
        
        created = self.check_create()
        if created:
            short_code = created["short_code"]
            self.check_clicks(short_code, 0)
            self.check_redirect(short_code, created["original_url"])
            self.check_clicks(short_code, 1)
        
        print()
        
        self.check_status("Empty URL Rejection", "POST", "/shorten", 400, json={"url": ""})
        self.check_status("Unknown Code Redirect", "GET", "/zzzz-missing", 404)
        self.check_status("Unknown Code Stats", "GET", "/stats/zzzz-missing", 404)
        self.check_status("Wrong Method", "GET", "/shorten", 405)
        self.check_descriptor()
        
        self.print_summary()
        
        return all(passed for _, passed in self.test_results)
    
    def print_summary(self):
        total = len(self.test_results)
        passed = sum(1 for _, p in self.test_results if p)
        failed = total - passed
        
        self.print_header("Test Summary")
        print(f"Total Checks: {total}")
        print(f"Passed:       {passed}")
        print(f"Failed:       {failed}")
        
        if failed > 0:
            print("\nFailed checks:")
            for name, ok in self.test_results:
                if not ok:
                    print(f"   - {name}")
        
        print()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Validate URL Shortener service functionality"
    )
    parser.add_argument(
        "--url",
        default="http://localhost:8080",
        help="Base URL of the service (default: http://localhost:8080)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=5,
        help="Per-request timeout in seconds (default: 5)"
    )
    
    args = parser.parse_args()
    
    validator = ServiceValidator(args.url, timeout=args.timeout)
    
    try:
        success = validator.run_all_tests()
    except KeyboardInterrupt:
        print("\n\nValidation interrupted by user")
        sys.exit(2)
    
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
