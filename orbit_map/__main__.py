from orbit_map.cli import cli

cli(prog_name="orbit-map")
