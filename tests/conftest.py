import matplotlib

# Tests render plots off-screen.
matplotlib.use("Agg")
