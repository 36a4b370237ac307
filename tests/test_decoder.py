"""Unit tests for the direct control decoder."""

import itertools
import unittest

from arm_sdk.errors import InvalidArgumentError
from arm_sdk.models import JOINT_ORDER, CommandWord, JointId, JointState, contribution
from arm_sdk.protocol import DirectControlDecoder, decode_payload, validate_direct


class TestValidateDirect(unittest.TestCase):
    """Tests for direct control validation bounds."""

    def test_accepts_values_above_bounds(self):
        validate_direct(172, 4, 4)
        validate_direct(254, 100, 8)

    def test_rejects_payload_at_or_below_170(self):
        for payload in (0, 64, 168, 170):
            with self.assertRaises(InvalidArgumentError):
                validate_direct(payload, 4, 4)

    def test_rejects_small_rotation_and_aux(self):
        with self.assertRaises(InvalidArgumentError):
            validate_direct(172, 2, 4)
        with self.assertRaises(InvalidArgumentError):
            validate_direct(172, 4, 2)
        with self.assertRaises(InvalidArgumentError):
            validate_direct(172, 0, 0)

    def test_rejects_odd(self):
        with self.assertRaises(InvalidArgumentError):
            validate_direct(173, 4, 4)
        with self.assertRaises(InvalidArgumentError):
            validate_direct(172, 5, 4)
        with self.assertRaises(InvalidArgumentError):
            validate_direct(172, 4, 7)

    def test_rejects_negative(self):
        with self.assertRaises(InvalidArgumentError):
            validate_direct(-172, 4, 4)
        with self.assertRaises(InvalidArgumentError):
            validate_direct(172, -4, 4)

    def test_invalid_argument_is_value_error(self):
        with self.assertRaises(ValueError):
            validate_direct(0, 0, 0)


class TestDecodePayload(unittest.TestCase):
    """Tests for payload decoding."""

    def test_zero(self):
        states = decode_payload(0)
        self.assertEqual(set(states.values()), {JointState.IDLE})
        self.assertEqual(list(states), list(JOINT_ORDER))

    def test_single_joints(self):
        self.assertIs(decode_payload(64)[JointId.SHOULDER], JointState.POSITIVE)
        self.assertIs(decode_payload(128)[JointId.SHOULDER], JointState.NEGATIVE)
        self.assertIs(decode_payload(16)[JointId.ELBOW], JointState.POSITIVE)
        self.assertIs(decode_payload(32)[JointId.ELBOW], JointState.NEGATIVE)
        self.assertIs(decode_payload(4)[JointId.WRIST], JointState.POSITIVE)
        self.assertIs(decode_payload(8)[JointId.WRIST], JointState.NEGATIVE)

    def test_claw_uses_same_polarity_as_other_joints(self):
        """Claw: 1 decodes as POSITIVE (close), 2 as NEGATIVE (open)."""
        self.assertIs(decode_payload(1)[JointId.CLAW], JointState.POSITIVE)
        self.assertIs(decode_payload(2)[JointId.CLAW], JointState.NEGATIVE)

    def test_mixed(self):
        states = decode_payload(128 + 16 + 8 + 1)
        self.assertEqual(states, {
            JointId.SHOULDER: JointState.NEGATIVE,
            JointId.ELBOW: JointState.POSITIVE,
            JointId.WRIST: JointState.NEGATIVE,
            JointId.CLAW: JointState.POSITIVE,
        })

    def test_encode_then_decode_reproduces_states(self):
        """Decoding an encoded state vector gives back the same states."""
        for target in itertools.product(list(JointState), repeat=len(JOINT_ORDER)):
            states = dict(zip(JOINT_ORDER, target))
            payload = sum(contribution(joint, state) for joint, state in states.items())
            self.assertEqual(decode_payload(payload), states)

    def test_above_max_decodes_greedily(self):
        """Out-of-range payloads saturate the heavy joints first."""
        states = decode_payload(172)
        self.assertEqual(set(states.values()), {JointState.NEGATIVE})


class TestDirectControlDecoder(unittest.TestCase):
    """Tests for DirectControlDecoder.decode."""

    def test_decode(self):
        word, states = DirectControlDecoder.decode((172, 4, 4))
        self.assertEqual(word, CommandWord(172, 4, 4))
        self.assertIs(states[JointId.SHOULDER], JointState.NEGATIVE)

    def test_accepts_list(self):
        word, _ = DirectControlDecoder.decode([200, 6, 8])
        self.assertEqual(word, CommandWord(200, 6, 8))

    def test_wrong_arity(self):
        with self.assertRaises(InvalidArgumentError):
            DirectControlDecoder.decode((172, 4))
        with self.assertRaises(InvalidArgumentError):
            DirectControlDecoder.decode((172, 4, 4, 4))

    def test_not_a_sequence(self):
        with self.assertRaises(InvalidArgumentError):
            DirectControlDecoder.decode(None)

    def test_non_integers(self):
        with self.assertRaises(InvalidArgumentError):
            DirectControlDecoder.decode((172.0, 4, 4))
        with self.assertRaises(InvalidArgumentError):
            DirectControlDecoder.decode(("172", 4, 4))
        with self.assertRaises(InvalidArgumentError):
            DirectControlDecoder.decode((172, True, 4))


if __name__ == '__main__':
    unittest.main()
