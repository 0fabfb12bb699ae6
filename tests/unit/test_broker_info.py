"""Tests for broker-info validation."""

import pytest

from src.cp_coi.application.broker_info import broker_pairs, validate_broker_info
from src.cp_coi.application.schemas import BrokerInfoRequest
from src.cp_common.errors import InvalidBrokerInfoError


class TestGlobalBroker:
    def test_requires_name_and_email(self) -> None:
        body = BrokerInfoRequest(broker_type="GLOBAL", broker_name="Jane")
        with pytest.raises(InvalidBrokerInfoError):
            validate_broker_info(body)

    def test_valid(self) -> None:
        body = BrokerInfoRequest(
            broker_type="GLOBAL", broker_name="Jane", broker_email="Jane@Broker.com"
        )
        assert validate_broker_info(body) == [("jane@broker.com", "Jane")]


class TestPerPolicyBroker:
    def test_requires_one_policy_broker(self) -> None:
        body = BrokerInfoRequest(broker_type="PER_POLICY", broker_gl_name="No Email")
        with pytest.raises(InvalidBrokerInfoError):
            validate_broker_info(body)

    def test_pairs_deduplicated_by_email(self) -> None:
        body = BrokerInfoRequest(
            broker_type="PER_POLICY",
            broker_gl_name="Gail",
            broker_gl_email="gail@broker.com",
            broker_auto_name="Gail Again",
            broker_auto_email="GAIL@broker.com",
            broker_wc_name="Walt",
            broker_wc_email="walt@broker.com",
        )
        assert validate_broker_info(body) == [
            ("gail@broker.com", "Gail"),
            ("walt@broker.com", "Walt"),
        ]

    def test_incomplete_pairs_skipped(self) -> None:
        body = BrokerInfoRequest(
            broker_type="PER_POLICY",
            broker_umbrella_email="umb@broker.com",
            broker_wc_name="Walt",
            broker_wc_email="walt@broker.com",
        )
        assert broker_pairs(body) == [("walt@broker.com", "Walt")]
