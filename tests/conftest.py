pytest_plugins = ["facet_lists.testing.fixtures"]
