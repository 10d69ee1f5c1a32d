import random
import unittest

from cyber_tetris.game import BagRandomizer, PieceQueue, TetrominoType


ALL_KINDS = sorted(TetrominoType)


class BagRandomizerTests(unittest.TestCase):
    def test_each_aligned_window_is_a_full_bag(self):
        bag = BagRandomizer(random.Random(7))
        for _ in range(20):
            window = [bag.next_kind() for _ in range(7)]
            self.assertEqual(sorted(window), ALL_KINDS)
        self.assertEqual(bag.bags_drawn, 20)

    def test_same_seed_gives_same_sequence(self):
        first = BagRandomizer(random.Random(3))
        second = BagRandomizer(random.Random(3))
        self.assertEqual([next(first) for _ in range(21)], [next(second) for _ in range(21)])

    def test_is_an_iterator(self):
        bag = BagRandomizer(random.Random(1))
        self.assertIs(iter(bag), bag)
        drawn = [kind for kind, _ in zip(bag, range(14))]
        self.assertEqual(len(drawn), 14)


class PieceQueueTests(unittest.TestCase):
    def test_queue_keeps_minimum_length_and_order(self):
        source = iter(ALL_KINDS + ALL_KINDS)
        queue = PieceQueue(source, min_length=5)
        self.assertEqual(queue.peek(), tuple(ALL_KINDS[:5]))
        self.assertEqual(queue.pop(), ALL_KINDS[0])
        self.assertEqual(len(queue), 5)
        self.assertEqual(queue.peek(), tuple(ALL_KINDS[1:6]))
        self.assertEqual(queue.peek(1), (ALL_KINDS[1],))

    def test_queue_over_bag_preserves_bag_order(self):
        reference = BagRandomizer(random.Random(11))
        expected = [next(reference) for _ in range(6)]
        queue = PieceQueue(BagRandomizer(random.Random(11)))
        self.assertEqual([queue.pop()] + list(queue.peek()), expected)


if __name__ == "__main__":
    unittest.main()
