import pytest

HEADER_FMT = ("(cd {pwd}; GOPATH={gopath} GOROOT={goroot}/ go build "
              "-gcflags=all=-d=ssa/all/time=1 . )")


def header(cfg, pwd="/w/gopath/src/foo", gopath="/w/gopath", roots="/r"):
    return HEADER_FMT.format(pwd=pwd, gopath=gopath, goroot=f"{roots}/{cfg}")


def timing(locator, phase, time_ns, func):
    return f"{locator}\t{phase}\tTIME(ns)\t{time_ns}\t{func}"


@pytest.fixture
def base_log():
    return [
        "some unrelated build chatter",
        header("Base"),
        "# foo",
        timing("a.go:1:1", "phaseX", 100, "main.F"),
        timing("a.go:1:1", "phaseY", 50, "main.F"),
    ]
