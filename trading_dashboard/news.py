from .models import NewsItem


class NewsFeedStore:
    """Append-only list of news items with a compact prefix view."""

    def __init__(self, items: tuple[NewsItem, ...] = ()) -> None:
        self.items: list[NewsItem] = list(items)
        self._next_id = max((item.id for item in self.items), default=-1) + 1

    def __len__(self) -> int:
        return len(self.items)

    def append_batch(self, count: int) -> list[NewsItem]:
        if count < 0:
            raise ValueError(f"Batch size must be non-negative, got {count}")

        batch = [
            NewsItem(
                id=self._next_id + i,
                title=f"Live update {self._next_id + i}",
                timestamp_label="just now",
                body="More simulated feed.",
            )
            for i in range(count)
        ]
        self.items.extend(batch)
        self._next_id += count
        return batch

    def load_more(self, page_size: int = 5) -> list[NewsItem]:
        return self.append_batch(page_size)

    def visible(self, limit: int) -> tuple[NewsItem, ...]:
        return tuple(self.items[: max(limit, 0)])

    @classmethod
    def seeded(cls, count: int = 8) -> "NewsFeedStore":
        """Create the store shown when the dashboard opens."""
        return cls(
            tuple(
                NewsItem(
                    id=i,
                    title=f"Market news {i + 1}",
                    timestamp_label=f"{i + 1}h ago",
                    body="Simulated news snippet.",
                )
                for i in range(count)
            )
        )
