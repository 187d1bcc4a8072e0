import unittest

from fumen_core.alphabet import DigitStream, write_digits
from fumen_core.descriptor import (
    decode_comment,
    decode_descriptor,
    encode_comment,
    encode_descriptor,
    pack_descriptor,
    unpack_descriptor,
)
from fumen_core.errors import RangeViolation, StreamTruncated
from fumen_core.page import Flags, MinoType, Page, Piece, Rotation


class TestDescriptor(unittest.TestCase):
    def test_given_t_north_default_flags_when_packing_then_known_value(self):
        piece = Piece(type=MinoType.T, rotation=Rotation.NORTH, location=0)
        value = pack_descriptor(piece, Flags(), False)
        self.assertEqual(value, 30741)
        self.assertEqual(write_digits(value, 3), "VgH")

    def test_given_packed_value_when_unpacking_then_fields_recovered(self):
        piece, flags, has_comment = unpack_descriptor(30741)
        self.assertEqual(piece, Piece(type=MinoType.T, rotation=Rotation.NORTH, location=0))
        self.assertEqual(flags, Flags())
        self.assertFalse(has_comment)

    def test_given_lock_off_when_packing_then_top_bit_set(self):
        # lock is stored inverted in the outermost slot
        value = pack_descriptor(Piece(type=0, rotation=0, location=0), Flags(color=False, lock=False), False)
        self.assertEqual(value, 8 * 4 * 240 * 16)

    def test_given_every_slot_at_max_when_packing_then_fits_three_digits(self):
        piece = Piece(type=MinoType.S, rotation=Rotation.WEST, location=239)
        flags = Flags(raise_=True, mirror=True, color=True, lock=False)
        value = pack_descriptor(piece, flags, True)
        self.assertEqual(value, 8 * 4 * 240 * 32 - 1)
        self.assertLess(value, 64 ** 3)
        p2, f2, hc = unpack_descriptor(value)
        self.assertEqual(p2, piece)
        self.assertEqual(f2, flags)
        self.assertTrue(hc)

    def test_given_garbage_type_when_packing_then_range_violation(self):
        with self.assertRaises(RangeViolation) as ctx:
            pack_descriptor(Piece(type=MinoType.G), Flags(), False)
        self.assertEqual(ctx.exception.field, 'piece.type')
        self.assertEqual(ctx.exception.value, 8)

    def test_given_bad_rotation_or_location_when_packing_then_range_violation(self):
        for piece, field in (
            (Piece(rotation=4), 'piece.rotation'),
            (Piece(location=240), 'piece.location'),
            (Piece(location=-1), 'piece.location'),
        ):
            with self.subTest(piece=piece):
                with self.assertRaises(RangeViolation) as ctx:
                    pack_descriptor(piece, Flags(), False)
                self.assertEqual(ctx.exception.field, field)

    def test_given_comment_lengths_when_roundtrip_then_equal(self):
        for n in (0, 1, 4, 5, 4095):
            with self.subTest(length=n):
                comment = "a" * n
                encoded = encode_comment(comment)
                self.assertEqual(len(encoded), 2 + 5 * (-(-n // 4)))
                stream = DigitStream.from_text(encoded)
                self.assertEqual(decode_comment(stream), comment)
                self.assertTrue(stream.exhausted())

    def test_given_comment_over_limit_when_encoding_then_range_violation(self):
        with self.assertRaises(RangeViolation) as ctx:
            encode_comment("a" * 4096)
        self.assertEqual(ctx.exception.field, 'flags.comment')
        # the limit applies to the escaped length: 1366 spaces escape to 4098 chars
        with self.assertRaises(RangeViolation):
            encode_comment(" " * 1366)

    def test_given_comment_with_escapes_when_roundtrip_then_equal(self):
        comment = "Hello, world! 100% ~ é"
        stream = DigitStream.from_text(encode_comment(comment))
        self.assertEqual(decode_comment(stream), comment)

    def test_given_comment_above_latin1_when_encoding_then_range_violation(self):
        with self.assertRaises(RangeViolation) as ctx:
            encode_comment("テト譜")
        self.assertEqual(ctx.exception.field, 'flags.comment')

    def test_given_truncated_comment_when_decoding_then_stream_truncated(self):
        encoded = encode_comment("hello")
        with self.assertRaises(StreamTruncated):
            decode_comment(DigitStream.from_text(encoded[:-1]))

    def test_given_page_with_comment_when_descriptor_roundtrip_then_equal(self):
        page = Page(
            piece=Piece(type=MinoType.L, rotation=Rotation.EAST, location=123),
            flags=Flags(raise_=True, mirror=False, color=False, lock=False, comment="PC!"),
        )
        stream = DigitStream.from_text(encode_descriptor(page))
        piece, flags = decode_descriptor(stream)
        self.assertEqual(piece, page.piece)
        self.assertEqual(flags, page.flags)
        self.assertTrue(stream.exhausted())

    def test_given_page_without_comment_when_encoding_then_three_digits_only(self):
        self.assertEqual(len(encode_descriptor(Page())), 3)


if __name__ == "__main__":
    unittest.main(verbosity=2)
