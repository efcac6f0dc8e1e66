"""AirVeil Quickstart — project two aircraft and find where their paths cross."""

from airveil import Position, Velocity, WCVTable, units

# Ownship departing SFO, intruder inbound from the north-west
own = Position.make_lat_lon_alt(37.6188, -122.375, 3500.0)
own_v = Velocity.make_trk_gs_vs(10.0, 250.0, 1500.0)

intruder = Position.make_lat_lon_alt(38.2, -123.1, 9000.0)
intruder_v = Velocity.make_trk_gs_vs(120.0, 300.0, -500.0)

print(f"Ownship:   {own}")
print(f"Intruder:  {intruder}")
print(f"Range:     {units.to_unit('nmi', own.distance_h(intruder)):.2f} NM")
print(f"Bearing:   {units.to_unit('deg', own.track(intruder)):.1f}°")

# Where are they in two minutes?
own_2 = own.linear(own_v, 120.0)
intruder_2 = intruder.linear(intruder_v, 120.0)
print(f"Ownship +2 min:  {own_2.to_string_units(precision=2)}")
print(f"Intruder +2 min: {intruder_2.to_string_units(precision=2)}")

# Crossing point of the two great-circle paths
crossing, t = Position.intersection(own, own_v, intruder, intruder_v)
if crossing.is_invalid():
    print("Paths do not cross")
else:
    print(f"Crossing:  {crossing} in {t:.0f} s")

# Loss of separation against NASA well-clear thresholds
wcv = WCVTable.nasa()
lost = own_2.los(intruder_2, wcv.get_dthr(), wcv.get_zthr())
print(f"Thresholds: {wcv}")
print(f"Loss of separation at +2 min: {lost}")

# Local Euclidean frame in nautical miles and feet
a = Position.make_xyz(0.0, 0.0, 5000.0)
b = Position.make_xyz(3.0, 4.0, 5200.0)
print(f"Planar range: {units.to_unit('nmi', a.distance_h(b)):.1f} NM, midpoint {a.mid_point(b)}")
