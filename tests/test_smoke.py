def test_imports():
    # Smoke test to ensure modules import
    import importlib

    modules = [
        "host_monitor.controllers.health_monitor_controller",
        "host_monitor.controllers.threshold_checker",
        "host_monitor.executors.alert_executor",
        "host_monitor.scripts.run_monitor",
        "host_monitor.utils.metrics",
        "host_monitor.utils.stats_client",
    ]

    for m in modules:
        importlib.import_module(m)
