# # Domain model for the privacy proxy
