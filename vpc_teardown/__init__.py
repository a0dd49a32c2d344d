"""Default VPC teardown across every region of an AWS account."""

__version__ = "0.1.0"
