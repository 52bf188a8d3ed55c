electron = 0
muon = 1
tau = 2

names = {electron: "e", muon: "mu", tau: "tau"}
