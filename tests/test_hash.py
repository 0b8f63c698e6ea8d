import contextlib
import io
import unittest

import numpy as np

from zinclha.hasher import (
    DIGEST_SIZE, print_timings, reset_timings, set_profiling, stage_timings, zinc_digest, zinc_hash,
)
from zinclha.profile import ALTERNATE, CANONICAL
from zinclha.rounds import apply_round, finalize
from zinclha.sbox import expand_seed
from zinclha.state import build_block, init_state, round_count

# Контрольные значения для регрессии, записаны однократно
GOLDEN_CANONICAL = {
    b"abc": "1d6292078663f4a407b74f2bf5db81a13ec23923a20b8e67c9477e35c2ea1cb4"
            "a1ec6a5f5f39c80b4898e3005852b83b1eb16b30b3e45afa95e868df7aea8854",
    b"\x00": "f58b66df9ab1f1337e44692df191f06adf9f8e0dc05f817c248e7fd16cef99d8"
             "1c26d8506c9a05fd4f508dc6243a6e62b1a2873cf922aee187f1065f9c5928ca",
    b"hello world": "6b6f19b48a9e0b55b59db90ab1299e20841e591cdc9229a6983296cb100adc20"
                    "9eb26edfe7b84692247b76e789f765b49827521571a24e1e4453ab731edaee05",
    b"The quick brown fox jumps over the lazy dog":
        "c26141de7073696a3f07f224e7b75c74f84269fccd66ee04366bf3f73cd1c91b"
        "74d29f491b9470e5ab7b90b3a69fd6674282d5a06884b7db0f3cbf6ba8b01926",
    bytes((i * 7 + 3) & 0xFF for i in range(100)):
        "3ca8a2ced396208d234326b8a5f66952145cc8a0972d8a624bc8b09da87a1809"
        "0c56b07e91c82170eb63c362bfbba3d0dbc5f3160fa9926420ba371df58372f0",
}

GOLDEN_ALTERNATE = {
    b"abc": "e2b988553806de87ffa1e6736a5e4d23872455e387470b0a7797587b87112615"
            "2f739cb91bdbe8cd0ebc0932312c476b3cddf3970902e2c22b7ae18a49a323fb",
    b"\x00": "42763c44ea060ce182d82bf3fa706c034818e6cc0b1c66761a5062c8ded62d8a"
             "346513bc88cd369b04b4dba2024e8cf7e4fe9ff17024f14f9c4b57db6b37e725",
    b"hello world": "0c0eee71bcf0536652306a4a0736a7586c5007229cda6791df52a9827c6ef0ae"
                    "5d48dea8f933fa996ddbd393bdb00edf5f9ee9e2202293f1bba621ac1756486e",
}


def hamming_distance(a: bytes, b: bytes) -> int:
    return sum(bin(x ^ y).count("1") for x, y in zip(a, b))


class TestGoldenVectors(unittest.TestCase):
    def test_canonical(self):
        for data, expected in GOLDEN_CANONICAL.items():
            with self.subTest(data=data[:16]):
                self.assertEqual(zinc_hash(data), expected)

    def test_alternate(self):
        for data, expected in GOLDEN_ALTERNATE.items():
            with self.subTest(data=data):
                self.assertEqual(zinc_hash(data, ALTERNATE), expected)

    def test_progress_bar_does_not_change_digest(self):
        with contextlib.redirect_stderr(io.StringIO()):
            digest = zinc_hash(b"abc", ALTERNATE, show_progress=True)
        self.assertEqual(digest, GOLDEN_ALTERNATE[b"abc"])

    def test_profiles_diverge(self):
        self.assertNotEqual(zinc_hash(b"abc", CANONICAL), zinc_hash(b"abc", ALTERNATE))


class TestDigestProperties(unittest.TestCase):
    def test_empty_input_equals_zero_byte(self):
        for profile in (CANONICAL, ALTERNATE):
            with self.subTest(profile=profile.name):
                self.assertEqual(zinc_hash(b"", profile), zinc_hash(b"\x00", profile))

    def test_deterministic(self):
        first = zinc_digest(b"zinc")
        second = zinc_digest(bytearray(b"zinc"))
        self.assertEqual(first, second)

    def test_fixed_size(self):
        for data in (b"a", b"xy" * 40, bytes(range(256))):
            with self.subTest(length=len(data)):
                digest = zinc_hash(data)
                self.assertEqual(len(digest), 2 * DIGEST_SIZE)
                self.assertEqual(digest, digest.lower())
                self.assertEqual(len(bytes.fromhex(digest)), DIGEST_SIZE)

    def test_rejects_text(self):
        with self.assertRaises(TypeError):
            zinc_digest("abc")

    def test_avalanche(self):
        """Инверсия одного бита меняет примерно половину из 512 бит"""
        long_input = bytes((i * 7 + 3) & 0xFF for i in range(100))
        samples = [
            (b"z", range(8)),
            (b"abc", range(24)),
            (long_input, range(0, len(long_input) * 8, 53)),
        ]
        for base_input, bits in samples:
            with self.subTest(length=len(base_input)):
                base = zinc_digest(base_input)
                distances = []
                for bit in bits:
                    flipped = bytearray(base_input)
                    flipped[bit // 8] ^= 1 << (bit % 8)
                    distances.append(hamming_distance(base, zinc_digest(bytes(flipped))))

                mean = sum(distances) / len(distances)
                print(f"\n[AVALANCHE] длина {len(base_input)}: среднее {mean:.1f}, "
                      f"мин {min(distances)}, макс {max(distances)}")
                self.assertTrue(200 <= mean <= 312)
                for distance in distances:
                    self.assertGreater(distance, 150)
                    self.assertLess(distance, 362)


class TestStageTimings(unittest.TestCase):
    def tearDown(self):
        set_profiling(False)
        reset_timings()

    def test_not_recorded_by_default(self):
        reset_timings()
        for _ in range(3):
            zinc_digest(b"timing")
        self.assertEqual(stage_timings, {})

    def test_recorded_when_enabled(self):
        reset_timings()
        set_profiling(True)
        zinc_digest(b"timing")
        for stage in ("prepare", "run_rounds", "finish"):
            self.assertEqual(len(stage_timings[stage]), 1)

        report = io.StringIO()
        print_timings(file=report)
        self.assertIn("run_rounds", report.getvalue())

    def test_reset(self):
        set_profiling(True)
        zinc_digest(b"timing")
        reset_timings()
        self.assertEqual(stage_timings, {})


class TestPipelineComposition(unittest.TestCase):
    def test_manual_pipeline_matches_driver(self):
        data = b"abc"
        state = init_state(data)
        block = build_block(data, state)
        table = expand_seed(data)

        for _ in range(round_count(data)):
            state = apply_round(state, block, table, data)
        state = finalize(state, block, table)

        self.assertEqual(state.dtype, np.uint8)
        self.assertEqual(state.tobytes().hex(), GOLDEN_CANONICAL[data])


if __name__ == "__main__":
    unittest.main()
