# Request building, transport and response handling
