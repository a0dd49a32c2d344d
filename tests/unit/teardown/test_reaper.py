"""Tests for ResourceReaper class.

Test coverage for phase ordering, failure isolation and internet gateway
detach/delete handling.
"""

from __future__ import annotations

from unittest.mock import Mock

from vpc_teardown.aws.gateway import RegionGateway
from vpc_teardown.models.resource_kind import ResourceKind
from vpc_teardown.models.teardown_outcome import FailedStep, OutcomeStatus
from vpc_teardown.teardown.reaper import ResourceReaper
from tests.fixtures.gateways import FakeRegionGateway, create_reporter, provider_error


def _reap(gateway: FakeRegionGateway, vpc_id: str = "vpc-1"):
    reporter, out, err = create_reporter()
    result = ResourceReaper(gateway, vpc_id, reporter).reap()
    return result, out.getvalue(), err.getvalue()


class TestResourceReaperOrdering:
    """Test suite for phase ordering."""

    def test_phases_run_in_fixed_order(self) -> None:
        """Test phases list IGW, subnet, route table, NACL, SG then delete the VPC."""
        gateway = FakeRegionGateway()

        _reap(gateway)

        listed = [call[1] for call in gateway.operations("list")]
        assert listed == [
            ResourceKind.INTERNET_GATEWAY,
            ResourceKind.SUBNET,
            ResourceKind.ROUTE_TABLE,
            ResourceKind.NETWORK_ACL,
            ResourceKind.SECURITY_GROUP,
        ]
        assert gateway.calls[-1] == ("delete", ResourceKind.VPC, "vpc-1")

    def test_phase_deletions_finish_before_next_phase(self) -> None:
        """Test every deletion of a phase precedes the next phase's list call."""
        gateway = FakeRegionGateway(
            resources={
                ResourceKind.SUBNET: ["subnet-1", "subnet-2"],
                ResourceKind.ROUTE_TABLE: ["rtb-1"],
                ResourceKind.SECURITY_GROUP: ["sg-1"],
            }
        )

        _reap(gateway)

        assert gateway.calls == [
            ("list", ResourceKind.INTERNET_GATEWAY, "vpc-1"),
            ("list", ResourceKind.SUBNET, "vpc-1"),
            ("delete", ResourceKind.SUBNET, "subnet-1"),
            ("delete", ResourceKind.SUBNET, "subnet-2"),
            ("list", ResourceKind.ROUTE_TABLE, "vpc-1"),
            ("delete", ResourceKind.ROUTE_TABLE, "rtb-1"),
            ("list", ResourceKind.NETWORK_ACL, "vpc-1"),
            ("list", ResourceKind.SECURITY_GROUP, "vpc-1"),
            ("delete", ResourceKind.SECURITY_GROUP, "sg-1"),
            ("delete", ResourceKind.VPC, "vpc-1"),
        ]

    def test_lists_use_vpc_id(self) -> None:
        """Test every list call is scoped to the reaped VPC."""
        gateway = FakeRegionGateway()

        _reap(gateway, vpc_id="vpc-abc")

        assert all(call[2] == "vpc-abc" for call in gateway.operations("list"))


class TestResourceReaperFailureIsolation:
    """Test suite for per-resource and per-phase failure isolation."""

    def test_delete_failure_does_not_block_siblings_or_later_phases(self) -> None:
        """Test a failing subnet leaves its sibling and later phases untouched."""
        gateway = FakeRegionGateway(
            resources={
                ResourceKind.SUBNET: ["subnet-1", "subnet-2"],
                ResourceKind.NETWORK_ACL: ["acl-1"],
            },
            delete_errors={"subnet-1": provider_error()},
        )

        result, _, _ = _reap(gateway)

        deleted = [call[2] for call in gateway.operations("delete")]
        assert deleted == ["subnet-1", "subnet-2", "acl-1", "vpc-1"]
        statuses = {outcome.resource_id: outcome.status for outcome in result.outcomes}
        assert statuses["subnet-1"] == OutcomeStatus.FAILED
        assert statuses["subnet-2"] == OutcomeStatus.SUCCEEDED
        assert statuses["acl-1"] == OutcomeStatus.SUCCEEDED
        assert statuses["vpc-1"] == OutcomeStatus.SUCCEEDED

    def test_list_failure_skips_only_that_phase(self) -> None:
        """Test a failed list call is reported once and later phases still run."""
        gateway = FakeRegionGateway(
            resources={ResourceKind.ROUTE_TABLE: ["rtb-1"], ResourceKind.SECURITY_GROUP: ["sg-1"]},
            list_errors={ResourceKind.ROUTE_TABLE: provider_error("RequestLimitExceeded", "Request limit exceeded")},
        )

        result, out, err = _reap(gateway)

        deleted = [call[2] for call in gateway.operations("delete")]
        assert "rtb-1" not in deleted
        assert deleted == ["sg-1", "vpc-1"]
        assert result.errors == ["failed to get rtbs: RequestLimitExceeded: Request limit exceeded"]
        assert err.strip() == "error: us-east-1 vpc-1 failed to get rtbs: RequestLimitExceeded: Request limit exceeded"
        assert "rtb-1" not in out

    def test_vpc_deleted_even_when_every_dependent_fails(self) -> None:
        """Test VPC deletion is attempted once regardless of earlier failures."""
        gateway = FakeRegionGateway(
            resources={ResourceKind.SUBNET: ["subnet-1"], ResourceKind.SECURITY_GROUP: ["sg-1"]},
            delete_errors={"subnet-1": provider_error(), "sg-1": provider_error()},
            list_errors={ResourceKind.NETWORK_ACL: provider_error("UnauthorizedOperation", "denied")},
        )

        result, _, _ = _reap(gateway)

        vpc_deletes = [call for call in gateway.operations("delete") if call[1] == ResourceKind.VPC]
        assert vpc_deletes == [("delete", ResourceKind.VPC, "vpc-1")]
        assert result.outcomes[-1].resource_kind == ResourceKind.VPC

    def test_vpc_delete_failure_is_recorded(self) -> None:
        """Test a failed VPC deletion is reported but not retried."""
        gateway = FakeRegionGateway(delete_errors={"vpc-1": provider_error()})

        result, out, _ = _reap(gateway)

        assert len(gateway.operations("delete")) == 1
        assert result.outcomes[-1].status == OutcomeStatus.FAILED
        assert "vpc-1" in out
        assert "(error: DependencyViolation: resource has a dependent object)" in out

    def test_vpc_removed_through_delete_vpc(self) -> None:
        """Test the VPC goes through the gateway's dedicated VPC deletion call."""
        gateway = Mock(spec=RegionGateway)
        gateway.region = "us-east-1"
        gateway.list_resource_ids.return_value = []

        result, out, _ = _reap(gateway)

        gateway.delete_vpc.assert_called_once_with("vpc-1")
        gateway.delete_resource.assert_not_called()
        assert result.outcomes[-1].status == OutcomeStatus.SUCCEEDED
        assert out.startswith("rm us-east-1")


class TestResourceReaperInternetGateways:
    """Test suite for two-step internet gateway removal."""

    def test_detach_then_delete(self) -> None:
        """Test a gateway is detached from the VPC and then deleted exactly once."""
        gateway = FakeRegionGateway(resources={ResourceKind.INTERNET_GATEWAY: ["igw-1"]})

        result, _, _ = _reap(gateway)

        assert gateway.calls[:3] == [
            ("list", ResourceKind.INTERNET_GATEWAY, "vpc-1"),
            ("detach", "igw-1", "vpc-1"),
            ("delete", ResourceKind.INTERNET_GATEWAY, "igw-1"),
        ]
        assert result.outcomes[0].status == OutcomeStatus.SUCCEEDED

    def test_detach_failure_skips_delete(self) -> None:
        """Test detach failure means delete is never attempted for that gateway."""
        gateway = FakeRegionGateway(
            resources={ResourceKind.INTERNET_GATEWAY: ["igw-1", "igw-2"]},
            detach_errors={"igw-1": provider_error("Gateway.NotAttached", "not attached")},
        )

        result, out, _ = _reap(gateway)

        igw_deletes = [call[2] for call in gateway.operations("delete") if call[1] == ResourceKind.INTERNET_GATEWAY]
        assert igw_deletes == ["igw-2"]
        failed = result.outcomes[0]
        assert failed.resource_id == "igw-1"
        assert failed.failed_step == FailedStep.DETACH
        assert failed.error_code == "Gateway.NotAttached"
        assert "igw-1" in out
        assert "(detach error: Gateway.NotAttached: not attached)" in out

    def test_delete_failure_after_detach_reports_delete_error(self) -> None:
        """Test a delete failure after a successful detach carries the delete error."""
        gateway = FakeRegionGateway(
            resources={ResourceKind.INTERNET_GATEWAY: ["igw-1"]},
            delete_errors={"igw-1": provider_error("InvalidInternetGatewayID.NotFound", "gone")},
        )

        result, out, _ = _reap(gateway)

        outcome = result.outcomes[0]
        assert outcome.failed_step == FailedStep.DELETE
        assert outcome.error_message == "InvalidInternetGatewayID.NotFound: gone"
        assert len([c for c in gateway.operations("delete") if c[1] == ResourceKind.INTERNET_GATEWAY]) == 1
        assert "(error: InvalidInternetGatewayID.NotFound: gone)" in out


class TestResourceReaperOutput:
    """Test suite for reaper output."""

    def test_one_line_per_attempt(self) -> None:
        """Test every attempted resource prints exactly one rm line."""
        gateway = FakeRegionGateway(
            region="eu-west-1",
            resources={ResourceKind.SUBNET: ["subnet-1"], ResourceKind.SECURITY_GROUP: ["sg-1"]},
        )

        result, out, err = _reap(gateway)

        lines = out.splitlines()
        assert len(lines) == 3
        assert all(line.startswith("rm eu-west-1") for line in lines)
        assert len(result.outcomes) == 3
        assert err == ""
