from kxo.xoroshiro import DEFAULT_SEED, Xoroshiro128


def test_default_seed():
    assert Xoroshiro128().state == DEFAULT_SEED


def test_same_seed_gives_same_sequence():
    a = Xoroshiro128(7, 11)
    b = Xoroshiro128(7, 11)
    assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]


def test_different_seeds_differ():
    a = Xoroshiro128(1, 2)
    b = Xoroshiro128(2, 1)
    assert [a.next() for _ in range(5)] != [b.next() for _ in range(5)]


def test_outputs_fit_in_64_bits():
    rng = Xoroshiro128()
    assert all(0 <= rng.next() < 2**64 for _ in range(200))


def test_zero_state_stays_zero():
    rng = Xoroshiro128(0, 0)
    assert rng.next() == 0
    rng.jump()
    assert rng.state == (0, 0)


def test_single_step_from_unit_state():
    rng = Xoroshiro128(1, 0)
    assert rng.next() == (1 << 24) + 1
    assert rng.state[1] == 1 << 37


def test_jump_is_deterministic_and_moves_state():
    a = Xoroshiro128()
    b = Xoroshiro128()
    a.jump()
    b.jump()
    assert a.state == b.state
    assert a.state != DEFAULT_SEED
    assert a.next() == b.next()


def test_jump_differs_from_plain_stepping():
    jumped = Xoroshiro128()
    jumped.jump()
    stepped = Xoroshiro128()
    stepped.next()
    assert jumped.state != stepped.state