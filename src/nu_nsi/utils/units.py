import math

GEV_TO_EV = 1.0e9               # eV per GeV

K2 = 4.62711492e-09             # mol/GeV^2/cm^3 to eV
GF = 1.1663787e-05              # Fermi constant [GeV^-2]

# sqrt(2) G_F N_e in eV, per (g/cm^3) of density and per unit of Z/A
VCOEFF_EV = K2 * math.sqrt(2) * GF
