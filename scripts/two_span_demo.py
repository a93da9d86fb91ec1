from span_beam.domain.beam import Beam
from span_beam.domain.material import Material
from span_beam.engine.analysis import BeamAnalysis
from span_beam.engine.two_span import solve_reactions

mat = Material.of("Acero", flexural_rigidity=210000000, deflection_scale=1.0)
beam = Beam(primary_span=4.0, secondary_span=6.0, material=mat)
w = 10.0

r = solve_reactions(beam.primary_span, beam.secondary_span, w)
print("M1 =", r.M1)
print("R1 =", r.R1, " R2 =", r.R2, " R3 =", r.R3)
print("ΣR - w·L =", r.total_vertical - w * beam.total_length)

analysis = BeamAnalysis()
M = analysis.get_bending_moment(beam, w, "two-span-unequal").equation
V = analysis.get_shear_force(beam, w, "two-span-unequal").equation
y = analysis.get_deflection(beam, w, "two-span-unequal").equation

print("M(0) =", M.at(0.0), " M(L1) =", M.at(beam.primary_span), " M(L) =", M.at(beam.total_length))
print("V(L1-) =", V.y[399], " V(L1) =", V.y[400])
print("extremos y:", y.extrema())
