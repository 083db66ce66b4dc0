from phase_times.strings import InternTable, PhaseIndex


def test_intern_returns_canonical_instance():
    t = InternTable()
    a = "".join(["ma", "in.F"])
    b = "".join(["mai", "n.F"])
    assert a is not b
    assert t.intern(a) is a
    assert t.intern(b) is a


def test_phase_index_first_seen_order():
    idx = PhaseIndex()
    assert idx.index("opt") == 0
    assert idx.index("lower") == 1
    assert idx.index("opt") == 0
    assert idx.next_index() == 2
    assert idx.names() == ["opt", "lower"]
