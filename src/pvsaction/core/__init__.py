"""Task building, argument assembly and orchestration."""
