import unittest

from sitecms.store.live import LiveQueryHub


class FakeLoader:
    def __init__(self):
        self.rows = {}
        self.fail = False

    def __call__(self, collection, tenant_id):
        if self.fail:
            raise RuntimeError("store down")
        return list(self.rows.get((collection, tenant_id), []))


class LiveQueryHubTests(unittest.TestCase):
    def setUp(self):
        self.loader = FakeLoader()
        self.hub = LiveQueryHub(self.loader)

    def test_subscribe_delivers_current_snapshot(self):
        self.loader.rows[("news", "demo")] = [{"id": "1"}]
        received = []

        self.hub.subscribe("news", "demo", received.append)

        self.assertEqual(received, [[{"id": "1"}]])
        self.assertEqual(self.hub.active_count("news", "demo"), 1)

    def test_publish_only_reaches_matching_tenant(self):
        demo, other = [], []
        self.hub.subscribe("news", "demo", demo.append)
        self.hub.subscribe("news", "other", other.append)

        self.loader.rows[("news", "demo")] = [{"id": "2"}]
        notified = self.hub.publish("news", "demo")

        self.assertEqual(notified, 1)
        self.assertEqual(demo[-1], [{"id": "2"}])
        self.assertEqual(other, [[]])

    def test_closed_subscription_receives_nothing(self):
        received = []
        subscription = self.hub.subscribe("news", "demo", received.append)
        subscription.close()
        subscription.close()

        self.loader.rows[("news", "demo")] = [{"id": "3"}]
        self.hub.publish("news", "demo")

        self.assertEqual(received, [[]])
        self.assertFalse(subscription.active)
        self.assertEqual(self.hub.active_count(), 0)

    def test_context_manager_releases_on_error(self):
        with self.assertRaises(ValueError):
            with self.hub.subscribe("news", "demo", lambda rows: None):
                self.assertEqual(self.hub.active_count(), 1)
                raise ValueError("boom")

        self.assertEqual(self.hub.active_count(), 0)

    def test_failed_initial_load_releases_subscription(self):
        self.loader.fail = True

        with self.assertRaises(RuntimeError):
            self.hub.subscribe("news", "demo", lambda rows: None)

        self.assertEqual(self.hub.active_count(), 0)
        events = [event.event_type for event in self.hub.tail()]
        self.assertEqual(events, ["subscribe", "unsubscribe"])

    def test_failing_subscriber_does_not_block_others(self):
        received = []

        def broken(rows):
            if rows:
                raise RuntimeError("render failed")

        self.hub.subscribe("news", "demo", broken)
        self.hub.subscribe("news", "demo", received.append)

        self.loader.rows[("news", "demo")] = [{"id": "4"}]
        self.hub.publish("news", "demo")

        self.assertEqual(received[-1], [{"id": "4"}])

    def test_publish_survives_loader_failure(self):
        self.hub.subscribe("news", "demo", lambda rows: None)
        self.loader.fail = True

        self.assertEqual(self.hub.publish("news", "demo"), 0)


if __name__ == "__main__":
    unittest.main()
