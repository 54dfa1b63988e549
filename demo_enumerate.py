import logging

from boxperm.iterator import PermutationRotationIterator
from boxperm.models import Box, BoxItem, Dimension

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    container = Dimension(6, 3, 3, name="Shelf")

    items = [
        BoxItem(Box(1, 2, 3, name="Flat"), count=2),
        BoxItem(Box(3, 1, 1, name="Rod"), count=1),
        BoxItem(Box(2, 2, 2, name="Cube"), count=1),
        BoxItem(Box(7, 1, 1, name="Pole"), count=1),  # fits no orientation
    ]

    iterator = PermutationRotationIterator.from_box_items(items, container, rotate_3d=True)

    print(f"Box types: {iterator.box_item_length()}, slots: {iterator.length()}")
    print(f"Distinct arrangements: {iterator.count_permutations()}")
    print(f"Rotations of the first arrangement: {iterator.count_rotations()}")

    combinations = 0
    low = 0
    while True:
        while True:
            combinations += 1
            if iterator.is_within_height(0, 1):
                low += 1
            if not iterator.next_rotation():
                break
        if not iterator.next_permutation():
            break

    print(f"Visited combinations: {combinations}")
    print(f"Combinations with every box at most 1 high: {low}")
