"""NextGen MedPrep API project package."""
