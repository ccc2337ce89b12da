"""Agent rollouts against the Block Sudoku environment."""
