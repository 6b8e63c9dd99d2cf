from framemint.cli import main

main(prog_name="framemint")
