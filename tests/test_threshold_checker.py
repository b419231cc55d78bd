import sys
import unittest
from pathlib import Path

# Ensure the repository root is on sys.path so 'host_monitor' can be imported
repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from host_monitor.controllers.threshold_checker import (  # noqa: E402
    LoadAverageFormat,
    NetworkRatePolicy,
    ThresholdChecker,
)
from host_monitor.utils.metrics import MetricVector, parse_stats  # noqa: E402

GIB = 1024 ** 3


def vec(load=1.0, mem=(1000.0, 100.0), disk=(1000.0, 100.0), net=(1000.0, 100.0)):
    return MetricVector(load, mem[0], mem[1], disk[0], disk[1], net[0], net[1])


class TestThresholdChecker(unittest.TestCase):
    def setUp(self):
        self.checker = ThresholdChecker()

    def test_healthy_snapshot_has_no_alerts(self):
        metrics, ok = parse_stats("10,1000,100,1000,100,1000,100")
        self.assertTrue(ok)
        self.assertEqual(self.checker.evaluate(metrics), [])

    def test_all_checks_fire_in_fixed_order(self):
        metrics, ok = parse_stats("35,1000,900,1000,950,1000,950")
        self.assertTrue(ok)
        self.assertEqual(
            self.checker.evaluate(metrics),
            [
                "Load Average is too high: 35",
                "Memory usage too high: 90%",
                "Free disk space is too low: 0 Mb left",
                "Network bandwidth usage high: 0 Mbit/s available",
            ],
        )

    def test_thresholds_are_strict(self):
        metrics = vec(load=30.0, mem=(1000.0, 800.0), disk=(1000.0, 900.0), net=(1000.0, 900.0))
        self.assertEqual(self.checker.evaluate(metrics), [])

    def test_load_average_formats(self):
        metrics = vec(load=35.9)
        self.assertEqual(self.checker.evaluate(metrics), ["Load Average is too high: 35"])
        two = ThresholdChecker(load_average_format=LoadAverageFormat.TWO_DECIMALS)
        self.assertEqual(two.evaluate(metrics), ["Load Average is too high: 35.90"])

    def test_memory_percent_is_truncated(self):
        metrics = vec(mem=(1000.0, 859.9))
        self.assertEqual(self.checker.evaluate(metrics), ["Memory usage too high: 85%"])

    def test_disk_free_space_in_whole_megabytes(self):
        # 10 GiB total, 512.5 MiB free -> 512
        total = 10.0 * GIB
        used = total - 512.5 * 1024 * 1024
        metrics = vec(disk=(total, used))
        self.assertEqual(self.checker.evaluate(metrics), ["Free disk space is too low: 512 Mb left"])

    def test_disk_overuse_clamps_free_space_to_zero(self):
        metrics = vec(disk=(1000.0, 1100.0))
        self.assertEqual(self.checker.evaluate(metrics), ["Free disk space is too low: 0 Mb left"])

    def test_network_rate_policies(self):
        # 125 MB/s link, 6.25 MB/s free
        metrics = vec(net=(125_000_000.0, 118_750_000.0))
        self.assertEqual(
            self.checker.evaluate(metrics),
            ["Network bandwidth usage high: 48 Mbit/s available"],
        )
        bytes_policy = ThresholdChecker(network_rate_policy=NetworkRatePolicy.BYTES_PER_MEGABYTE)
        self.assertEqual(
            bytes_policy.evaluate(metrics),
            ["Network bandwidth usage high: 6 Mbit/s available"],
        )

    def test_policies_accept_string_values(self):
        checker = ThresholdChecker(load_average_format="two_decimals", network_rate_policy="bytes_per_megabyte")
        self.assertIs(checker.load_average_format, LoadAverageFormat.TWO_DECIMALS)
        self.assertIs(checker.network_rate_policy, NetworkRatePolicy.BYTES_PER_MEGABYTE)

    def test_zero_total_suppresses_check(self):
        metrics = vec(mem=(0.0, 5000.0), disk=(0.0, 5000.0), net=(0.0, 5000.0))
        self.assertEqual(self.checker.evaluate(metrics), [])

    def test_checks_are_independent(self):
        metrics = vec(load=50.0, mem=(0.0, 10.0), disk=(1000.0, 950.0))
        msgs = self.checker.evaluate(metrics)
        self.assertEqual(len(msgs), 2)
        self.assertTrue(msgs[0].startswith("Load Average is too high"))
        self.assertTrue(msgs[1].startswith("Free disk space is too low"))

    def test_alerts_are_monotonic_in_used(self):
        total = 1000.0
        cases = [
            ("Memory usage too high", 800.0, lambda u: vec(mem=(total, u))),
            ("Free disk space is too low", 900.0, lambda u: vec(disk=(total, u))),
            ("Network bandwidth usage high", 900.0, lambda u: vec(net=(total, u))),
        ]
        for prefix, limit, build in cases:
            for used in range(0, 1201, 25):
                msgs = self.checker.evaluate(build(float(used)))
                fired = any(m.startswith(prefix) for m in msgs)
                self.assertEqual(fired, used > limit, (prefix, used))


if __name__ == "__main__":
    unittest.main()
