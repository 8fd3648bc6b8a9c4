import ipaddress
import sys

from flagtree import CommandBuilder, run, string_flag
from flagtree.utils import setup_logging

setup_logging()


def check_ip(literal: str) -> None:
    """Reject anything that is not an IPv4 or IPv6 address."""
    try:
        ipaddress.ip_address(literal)
    except ValueError:
        raise ValueError(f"invalid IP: {literal}") from None


ip = string_flag("ip", "127.0.0.1", "IP address to ping").validate(check_ip)


def ping(args: list[str]) -> int:
    print(f"ping: {ip.get()}")
    return 0


cmd = (
    CommandBuilder("ping", "Send ICMP ECHO_REQUEST to network hosts")
    .flags(ip)
    .handle(ping)
)

if __name__ == "__main__":
    sys.exit(run(cmd))
