"""Reading of character motion scripts: models, part layout and keyframed motions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .geometry import Vec3

MAX_MOTIONS = 64
MAX_KEYS = 32
MAX_MODELS = 64
MAX_PARTS = 64

_INT_PREFIX = re.compile(r"[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_IGNORED_CHARACTER_LINES = frozenset({"MOVE", "JUMP", "RADIUS", "HEIGHT"})


def _ones() -> Vec3:
    return Vec3(1.0, 1.0, 1.0)


@dataclass
class KeyPose:
    """Target position, rotation and scale of one part in a keyframe."""

    pos: Vec3 = field(default_factory=Vec3)
    rot: Vec3 = field(default_factory=Vec3)
    scl: Vec3 = field(default_factory=Vec3)


@dataclass
class Keyframe:
    """The number of frames a key lasts and the pose of each part, in part order."""

    frame: int = 0
    poses: list[KeyPose] = field(default_factory=list)


@dataclass
class Motion:
    """A sequence of keyframes, optionally looping."""

    loop: bool = False
    num_keys: int = 0
    keys: list[Keyframe] = field(default_factory=list)


@dataclass
class PartSetup:
    """How one part of a character is built: its model, parent and rest pose."""

    model_index: int = 0
    parent: int = -1
    pos: Vec3 = field(default_factory=Vec3)
    rot: Vec3 = field(default_factory=Vec3)
    scl: Vec3 = field(default_factory=_ones)


@dataclass
class MotionScript:
    """Everything a motion script describes."""

    model_count: int = 0
    model_files: list[str] = field(default_factory=list)
    part_count: int = 0
    parts: list[PartSetup] = field(default_factory=list)
    motions: list[Motion] = field(default_factory=list)


class _TokenStream:
    """Whitespace separated tokens that remember the line they came from."""

    def __init__(self, text: str) -> None:
        self._tokens = [
            (number, token)
            for number, line in enumerate(text.splitlines())
            for token in line.split()
        ]
        self._index = 0
        self._line = -1

    def next_token(self) -> Optional[str]:
        if self._index >= len(self._tokens):
            return None
        self._line, token = self._tokens[self._index]
        self._index += 1
        return token

    def require(self, what: str) -> str:
        token = self.next_token()
        if token is None:
            raise ValueError(f"motion script ends while reading {what}")
        return token

    def skip_line(self) -> None:
        """Drop what is left of the line of the last token read."""
        while self._index < len(self._tokens) and self._tokens[self._index][0] == self._line:
            self._index += 1

    def until(self, terminator: str):
        """Yield tokens up to, and consuming, the terminator or the end of input."""
        while (token := self.next_token()) is not None and token != terminator:
            yield token


def _atoi(token: str) -> int:
    match = _INT_PREFIX.match(token)
    return int(match.group()) if match else 0


def _stof(token: str) -> float:
    match = _FLOAT_PREFIX.match(token)
    if match is None:
        raise ValueError(f"not a number: {token!r}")
    return float(match.group())


def _read_int(stream: _TokenStream, what: str) -> int:
    stream.require("'='")
    value = _atoi(stream.require(what))
    stream.skip_line()
    return value


def _read_vec(stream: _TokenStream, what: str) -> Vec3:
    stream.require("'='")
    return Vec3(*(_stof(stream.require(what)) for _ in range(3)))


def _skip_block(stream: _TokenStream, terminator: str) -> None:
    for _ in stream.until(terminator):
        pass


def _parse_part(stream: _TokenStream) -> PartSetup:
    part = PartSetup()
    for token in stream.until("END_PARTSSET"):
        if token.startswith("#"):
            stream.skip_line()
        elif token == "INDEX":
            part.model_index = _read_int(stream, "INDEX")
        elif token == "PARENT":
            part.parent = _read_int(stream, "PARENT")
        elif token == "POS":
            part.pos = _read_vec(stream, "POS")
            stream.skip_line()
        elif token == "ROT":
            part.rot = _read_vec(stream, "ROT")
            stream.skip_line()
        elif token == "SIZ":
            part.scl = _read_vec(stream, "SIZ")
            stream.skip_line()
    return part


def _parse_character(stream: _TokenStream, script: MotionScript) -> None:
    for token in stream.until("END_CHARACTERSET"):
        if token.startswith("#") or token in _IGNORED_CHARACTER_LINES:
            stream.skip_line()
        elif token == "NUM_PARTS":
            script.part_count = _read_int(stream, "NUM_PARTS")
        elif token == "PARTSSET":
            if len(script.parts) < MAX_PARTS:
                script.parts.append(_parse_part(stream))
            else:
                _skip_block(stream, "END_PARTSSET")


def _parse_key(stream: _TokenStream) -> KeyPose:
    pose = KeyPose()
    for token in stream.until("END_KEY"):
        if token.startswith("#"):
            stream.skip_line()
        elif token == "POS":
            pose.pos = _read_vec(stream, "POS")
        elif token == "ROT":
            pose.rot = _read_vec(stream, "ROT")
        elif token == "SIZ":
            pose.scl = _read_vec(stream, "SIZ")
    return pose


def _parse_keyset(stream: _TokenStream) -> Keyframe:
    key = Keyframe()
    for token in stream.until("END_KEYSET"):
        if token.startswith("#"):
            stream.skip_line()
        elif token == "FRAME":
            key.frame = _read_int(stream, "FRAME")
        elif token == "KEY":
            if len(key.poses) >= MAX_PARTS:
                raise ValueError(f"a keyframe may hold at most {MAX_PARTS} part poses")
            key.poses.append(_parse_key(stream))
    return key


def _parse_motion_set(stream: _TokenStream) -> Motion:
    motion = Motion()
    for token in stream.until("END_MOTIONSET"):
        if token.startswith("#"):
            stream.skip_line()
        elif token == "LOOP":
            stream.require("'='")
            motion.loop = stream.require("LOOP") != "0"
            stream.skip_line()
        elif token == "NUM_KEY":
            motion.num_keys = _read_int(stream, "NUM_KEY")
        elif token == "KEYSET":
            if len(motion.keys) >= min(motion.num_keys, MAX_KEYS):
                raise ValueError(
                    f"KEYSET number {len(motion.keys) + 1} exceeds NUM_KEY {motion.num_keys}"
                )
            motion.keys.append(_parse_keyset(stream))
    return motion


def parse_motion(text: str) -> MotionScript:
    """Parse the text of a motion script.

    Raises ValueError when a number cannot be read, when the input ends in the
    middle of a value, or when a motion holds more keys than it declares.
    """
    stream = _TokenStream(text)
    script = MotionScript()
    while (token := stream.next_token()) is not None:
        if token.startswith("#"):
            stream.skip_line()
        elif token == "NUM_MODEL":
            script.model_count = _read_int(stream, "NUM_MODEL")
        elif (
            token == "MODEL_FILENAME"
            and script.model_count > 0
            and len(script.model_files) < min(script.model_count, MAX_MODELS)
        ):
            stream.require("'='")
            script.model_files.append(stream.require("MODEL_FILENAME"))
            stream.skip_line()
        elif token == "CHARACTERSET":
            _parse_character(stream, script)
        elif token == "MOTIONSET":
            if len(script.motions) < MAX_MOTIONS:
                script.motions.append(_parse_motion_set(stream))
            else:
                _skip_block(stream, "END_MOTIONSET")
    return script


def _decode(data: bytes) -> str:
    for encoding in ("utf-8", "cp932"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("latin-1")


def load_motion(path: Union[str, Path]) -> MotionScript:
    """Read and parse a motion script file; raises OSError if it cannot be read."""
    return parse_motion(_decode(Path(path).read_bytes()))