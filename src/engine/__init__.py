"""
Analytics engine for Earnings Pulse.

Pure, synchronous transformations from raw documents to view models:
- Tone Classifier
- Series Builder
- Delta Computer
- View Model Assembler
"""
