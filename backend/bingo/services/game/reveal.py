from .visibility import game_over_payload


class RevealCoordinator:
    """Runs the one-shot reveal: fix the lineup, then broadcast ``gameOver``.

    ``publisher`` is anything with ``publish(events)`` taking a list of
    ``(event_name, payload)`` pairs.
    """

    def __init__(self, store, publisher):
        self.store = store
        self.publisher = publisher

    def reveal(self, lineup) -> bool:
        with self.store.lock:
            if not self.store.reveal_final_lineup(lineup):
                return False
            self.publisher.publish([('gameOver', game_over_payload(self.store))])
            return True
