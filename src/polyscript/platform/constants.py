"""Well-known keys for storing evaluation data in an execution context."""

# Context key holding the data map handed to the evaluator
EVAL_DATA = "eval_data"

# Top-scope variable name scripts use to reach the input data
CTX = "ctx"

# Bucket keys inside the EVAL_DATA map
INPUT_DATA = "input_data"
REQUEST = "request"
RESPONSE = "response"
