# School Fee Tracker request handlers
