import pytest

from gorplay.limiter import Limiter, parse_limit_options


class FakeOutput:
    def __init__(self):
        self.written = []
        self.closed = False

    def plugin_write(self, msg):
        self.written.append(msg)
        return len(msg)

    def close(self):
        self.closed = True


class FakeInput:
    def plugin_read(self):
        return b"GET / HTTP/1.1\r\n\r\n"


class PacedInput(FakeInput):
    speed_factor = 1.0


def fixed_clock():
    return 0


def test_output_limiter():
    output = FakeOutput()
    limiter = Limiter(output, "10", clock=fixed_clock)
    results = [limiter.plugin_write(b"GET") for _ in range(100)]
    assert len(output.written) == 10
    assert results.count(0) == 90


def test_input_limiter():
    limiter = Limiter(FakeInput(), "10", clock=fixed_clock)
    messages = [limiter.plugin_read() for _ in range(100)]
    assert len([m for m in messages if m is not None]) == 10


def test_percent_limiter_blocks_everything():
    output = FakeOutput()
    limiter = Limiter(output, "0%")
    for _ in range(100):
        limiter.plugin_write(b"GET")
    assert output.written == []


def test_percent_limiter_passes_everything():
    output = FakeOutput()
    limiter = Limiter(output, "100%")
    for _ in range(100):
        limiter.plugin_write(b"GET")
    assert len(output.written) == 100


def test_rate_window_resets_after_a_second():
    now = [0]
    output = FakeOutput()
    limiter = Limiter(output, "2", clock=lambda: now[0])
    for _ in range(5):
        limiter.plugin_write(b"a")
    assert len(output.written) == 2
    now[0] = 2_000_000_000
    for _ in range(5):
        limiter.plugin_write(b"b")
    assert output.written == [b"a", b"a", b"b", b"b"]


@pytest.mark.parametrize(
    "options,expected",
    [("10", (10, False)), ("10%", (10, True)), ("%", (0, False)), ("abc", (0, False))],
)
def test_parse_limit_options(options, expected):
    assert parse_limit_options(options) == expected


def test_self_paced_plugin_gets_speed_factor():
    plugin = PacedInput()
    limiter = Limiter(plugin, "50%")
    assert plugin.speed_factor == 0.5
    assert limiter.is_limited() is False


def test_write_to_reader_only_plugin_fails():
    limiter = Limiter(FakeInput(), "100%")
    with pytest.raises(BrokenPipeError):
        limiter.plugin_write(b"GET")


def test_read_from_writer_only_plugin_fails():
    limiter = Limiter(FakeOutput(), "100%")
    with pytest.raises(BrokenPipeError):
        limiter.plugin_read()


def test_close_delegates():
    output = FakeOutput()
    Limiter(output, "10").close()
    assert output.closed is True


def test_str_describes_limit():
    limiter = Limiter("plugin", "5%")
    assert str(limiter) == "Limiting plugin to: 5 (isPercent: true)"