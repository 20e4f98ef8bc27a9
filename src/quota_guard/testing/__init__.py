"""Testing helpers – fakes for clocks and misbehaving stores."""
