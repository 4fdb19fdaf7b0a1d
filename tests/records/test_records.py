# SPDX-License-Identifier: MIT
"""
Tests for record models and read-path enrichment.
"""
import json
from datetime import datetime, timedelta

import pytest
from pydantic import ValidationError

from expirytrack.config.loader import get_default_config
from expirytrack.core.exceptions import ExpiryTrackError
from expirytrack.records import (
    Certificate,
    Subscription,
    enrich_certificate,
    enrich_subscription,
    load_records,
)

NOW = datetime(2026, 1, 15, 12, 0, 0)


def make_cert(expiry):
    return Certificate(id="c1", name="First Aid", issuer="Red Cross", expiry_date=expiry)


def make_sub(end):
    return Subscription(
        id="s1", title="Cloud", email="ops@example.com", card_title="Visa 4242", end_date=end, amount="9.99"
    )


class TestModels:
    """Test date coercion on the stored models."""

    def test_day_first_string(self):
        assert make_cert("31/12/2026").expiry_date == datetime(2026, 12, 31)

    def test_iso_string(self):
        assert make_cert("2026-12-31T08:00:00").expiry_date == datetime(2026, 12, 31, 8, 0)

    def test_date_time_string(self):
        assert make_cert("2026-12-31 08:00:00").expiry_date == datetime(2026, 12, 31, 8, 0)

    def test_impossible_date_rejected(self):
        with pytest.raises(ValidationError):
            make_cert("31/02/2026")

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError):
            make_cert("whenever")

    def test_month_first_context(self):
        cert = Certificate.model_validate(
            {"id": "c1", "name": "CPR", "expiry_date": "12/31/2026"}, context={"day_first": False}
        )
        assert cert.expiry_date == datetime(2026, 12, 31)


class TestEnrichment:
    """Test derived fields added on read."""

    def test_certificate_in_countdown_window(self):
        data = enrich_certificate(make_cert(NOW + timedelta(days=10)), NOW)

        assert data["name"] == "First Aid"
        assert data["status"] == "expiring"
        assert data["days_until_expiry"] == 10
        assert data["countdown_status"] == "expiring"
        assert data["countdown_percentage"] == pytest.approx(10 / 15 * 100)

    def test_certificate_outside_countdown_window(self):
        data = enrich_certificate(make_cert(NOW + timedelta(days=20)), NOW)

        assert data["status"] == "expiring"
        assert data["countdown_status"] == "valid"
        assert data["countdown_percentage"] == 100.0

    def test_expired_certificate(self):
        data = enrich_certificate(make_cert(NOW - timedelta(days=3)), NOW)

        assert data["is_expired"] is True
        assert data["days_overdue"] == 3
        assert data["countdown_percentage"] == 0.0

    def test_config_windows(self):
        config = {**get_default_config(), "collection_window_days": 5}
        data = enrich_certificate(make_cert(NOW + timedelta(days=10)), NOW, config)
        assert data["status"] == "valid"

    def test_subscription_progress(self):
        data = enrich_subscription(make_sub(NOW + timedelta(days=73)), NOW)

        assert data["title"] == "Cloud"
        assert data["amount"] == "9.99"
        assert data["status"] == "valid"
        assert data["progress_percentage"] == pytest.approx(80.0)

    def test_expired_subscription(self):
        data = enrich_subscription(make_sub(NOW - timedelta(days=1)), NOW)

        assert data["status"] == "expired"
        assert data["progress_percentage"] == 100.0


class TestLoadRecords:
    """Test loading record files."""

    def test_json(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text(
            json.dumps(
                {
                    "certificates": [{"id": "c1", "name": "CPR", "expiry_date": "01/03/2026"}],
                    "subscriptions": [
                        {
                            "id": "s1",
                            "title": "Cloud",
                            "email": "a@b.c",
                            "card_title": "Visa",
                            "end_date": "2026-06-30",
                            "amount": 12,
                        }
                    ],
                }
            )
        )

        certificates, subscriptions = load_records(str(path))

        assert certificates[0].expiry_date == datetime(2026, 3, 1)
        assert subscriptions[0].end_date == datetime(2026, 6, 30)

    def test_yaml_dates(self, tmp_path):
        path = tmp_path / "records.yml"
        path.write_text("certificates:\n  - id: c1\n    name: CPR\n    expiry_date: 2026-03-01\n")

        certificates, subscriptions = load_records(str(path))

        assert certificates[0].expiry_date == datetime(2026, 3, 1)
        assert subscriptions == []

    def test_month_first(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text(json.dumps({"certificates": [{"id": "c1", "name": "CPR", "expiry_date": "01/03/2026"}]}))

        certificates, _ = load_records(str(path), day_first=False)
        assert certificates[0].expiry_date == datetime(2026, 1, 3)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ExpiryTrackError):
            load_records(str(tmp_path / "nope.json"))

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "records.yml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ExpiryTrackError):
            load_records(str(path))

    def test_invalid_record(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text(json.dumps({"certificates": [{"id": "c1", "name": "CPR", "expiry_date": "soon"}]}))
        with pytest.raises(ValidationError):
            load_records(str(path))
