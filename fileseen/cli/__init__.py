"""Console entry points: fileseen-report, fileseen-validate, fileseen-sim."""
