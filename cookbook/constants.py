"""Constants shared by the models and the statement builder."""

# Stored in recipes.image when a recipe has no image
NIL_UUID = "00000000-0000-0000-0000-000000000000"
