import numpy as np
import pytest

from nu_nsi.hamiltonian import matter
from nu_nsi.hamiltonian.nsi import NSIHamiltonian
from nu_nsi.matter.path import MatterPath
from nu_nsi.utils import units


def test_matter_potential_constant():
    # sqrt(2) G_F N_A (ħc)^3 ≈ 7.63e-14 eV per g/cm^3 at Z/A = 1
    assert units.VCOEFF_EV == pytest.approx(7.63e-14, rel=1e-3)
    assert units.VCOEFF_EV == pytest.approx(units.K2 * np.sqrt(2) * units.GF, rel=1e-15)


def test_matter_only_neutrino(make_engine):
    d, z, E = 3.1, 0.47, 2.0
    h = NSIHamiltonian(engine=make_engine(density=d, zoa=z, energy_GeV=E))
    h.set_nsi(0.3, 0.2, 0.1, -0.4, 0.05, 0.25, 0.5, -1.0, 2.0)

    H = h.update_ham()
    kr2GNe = np.sqrt(2) * units.GF * units.K2 * d * z
    for i in range(3):
        for j in range(i, 3):
            assert np.isclose(H[i, j], kr2GNe * h.get_eps(i, j), rtol=1e-12, atol=0)


def test_only_upper_triangle_written(make_engine, hms):
    h = NSIHamiltonian(engine=make_engine(hms=hms, density=2.6))
    h.set_nsi(0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9)
    H = h.update_ham()
    assert H.shape == (3, 3)
    np.testing.assert_array_equal(np.tril(H, -1), 0)
    assert H is h.ham


@pytest.mark.parametrize("antineutrino", [False, True])
def test_neutrino_antineutrino_relation(make_engine, hms, antineutrino):
    d, z, E = 2.8, 0.5, 0.7
    h = NSIHamiltonian(engine=make_engine(hms=hms, density=d, zoa=z, energy_GeV=E, antineutrino=antineutrino))
    h.set_nsi(0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9)
    H = h.update_ham()

    lv = 2 * units.GEV_TO_EV * E
    kr2GNe = units.VCOEFF_EV * d * z
    for i in range(3):
        for j in range(i, 3):
            eps = h.get_eps(i, j)
            if antineutrino:
                expected = np.conj(hms[i, j] / lv - kr2GNe * eps)
            else:
                expected = hms[i, j] / lv + kr2GNe * eps
            assert np.isclose(H[i, j], expected, rtol=1e-12, atol=0)


def test_antineutrino_is_not_plain_conjugate(make_engine, hms):
    engine = make_engine(hms=hms, density=2.8, energy_GeV=1.0)
    h = NSIHamiltonian(engine=engine)
    h.set_eps_emu(0.2, 0.3)

    H_nu = np.copy(h.update_ham())
    engine.antineutrino = True
    H_nubar = h.update_ham()

    # vacuum part conjugated, matter part conjugated and sign-flipped
    vacuum = np.triu(hms) / (2 * units.GEV_TO_EV)
    np.testing.assert_allclose(H_nu + np.conj(H_nubar), 2 * vacuum, rtol=1e-12, atol=1e-30)
    assert not np.allclose(H_nubar, np.conj(H_nu), rtol=1e-6, atol=0)


def test_zero_nsi_end_to_end(make_engine, hms):
    engine = make_engine(hms=hms, density=2.6, zoa=0.5, energy_GeV=1.0)
    h = NSIHamiltonian(engine=engine)
    h.set_nsi(0, 0, 0, 0, 0, 0, 0, 0, 0)
    H = h.update_ham()

    expected = np.triu(hms) / (2 * 1e9)
    expected[0, 0] += np.sqrt(2) * units.GF * units.K2 * 2.6 * 0.5
    np.testing.assert_allclose(H, expected, rtol=1e-12, atol=1e-30)


def test_zero_nsi_matches_standard_matter(make_engine, hms):
    for antineutrino in (False, True):
        engine = make_engine(hms=hms, density=13.0, zoa=0.466, energy_GeV=5.0, antineutrino=antineutrino)
        H_nsi = NSIHamiltonian(engine=engine).update_ham()
        H_std = matter.Hamiltonian(engine=engine).update_ham()
        np.testing.assert_allclose(H_nsi, H_std, rtol=1e-14, atol=0)


def test_update_does_not_touch_eigensystem_flag(make_engine, hms):
    engine = make_engine(hms=hms, density=2.6)
    h = NSIHamiltonian(engine=engine)
    engine.got_es = True
    h.update_ham()
    assert engine.got_es


def test_update_follows_engine_state(make_engine, hms):
    engine = make_engine(hms=hms, density=2.6, energy_GeV=1.0)
    h = NSIHamiltonian(engine=engine)
    H1 = np.copy(h.update_ham())

    engine.energy = 2.0
    engine.path = MatterPath(length_km=1000.0, density=0.0, zoa=0.5)
    H2 = h.update_ham()

    np.testing.assert_allclose(H2, np.triu(hms) / (2 * 2.0e9), rtol=1e-14)
    assert not np.allclose(H1, H2, rtol=1e-6, atol=0)


def test_full_hamiltonian_is_hermitian(make_engine, hms):
    h = NSIHamiltonian(engine=make_engine(hms=hms, density=2.6))
    h.set_nsi(0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9)
    h.update_ham()
    H = h.get_full_hamiltonian()
    np.testing.assert_allclose(H, np.conj(H.T), rtol=0, atol=0)
    np.testing.assert_array_equal(np.triu(H), h.ham)


def test_engine_type_is_checked():
    with pytest.raises(TypeError):
        NSIHamiltonian(engine=object())


def test_builder_exposes_engine(make_engine):
    engine = make_engine()
    h = NSIHamiltonian(engine=engine)
    assert h.engine is engine
