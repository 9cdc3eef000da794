class PageStartIndexLedger:
    """
    Scan start offsets of the pages visited by moving forward one page at a time.

    Position i holds the offset that produced page i + 1, so position 0 is
    always 0. Pages reached by a jump are never recorded; their offset is
    estimated as (page - 1) * page_size, which ignores deleted rows skipped
    earlier in the scan.
    """

    def __init__(self):
        self._start_indices: list[int] = [0]

    def reset(self) -> None:
        self._start_indices = [0]

    def record(self, page: int, start_index: int) -> bool:
        """
        Stores start_index for page if page directly follows the last tracked page.

        Already tracked pages keep their offset. A page further ahead is not
        stored either, since the pages in between have no known offset.

        Returns:
            bool: True if a new entry was appended.
        """
        if page != len(self._start_indices) + 1:
            return False
        self._start_indices.append(start_index)
        return True

    def start_index_for(self, page: int, page_size: int) -> int:
        """Returns the tracked offset of page, or the (page - 1) * page_size estimate."""
        if 1 <= page <= len(self._start_indices):
            return self._start_indices[page - 1]
        return (page - 1) * page_size

    def as_list(self) -> list[int]:
        return list(self._start_indices)

    def __len__(self) -> int:
        return len(self._start_indices)
