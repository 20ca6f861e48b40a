"""python -m src.prng num_observations seed"""

from src.prng.driver import run

run()
